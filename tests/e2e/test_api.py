import pytest
from httpx import ASGITransport, AsyncClient

from stch_vehicular.main import create_app

from conftest import CONCESSION_ID, VEHICLE_ID


def modification_body(**overrides):
    body = {
        "vehicleAttributes": {
            "serial": "NIV12345",
            "year": 2020,
            "class": "Automóvil",
            "type": "Sedán",
            "make": "Nissan",
            "submodel": "Versa",
            "version": "Advance",
            "color": "Azul",
            "passengers": 5,
            "cylinders": 4,
            "doors": 4,
            "engineNumber": "MTR001",
            "assignedPlate": "A123BCD",
            "serviceType": 1,
            "vehicularKey": "0010203",
        },
        "insurancePolicy": {
            "concessionId": CONCESSION_ID,
            "insurerName": "Seguros Hidalgo",
            "policyNumber": "POL-2026-001",
            "issueDate": "2026-01-01",
            "expirationDate": "2027-01-01",
        },
        "actingUser": {"userId": 42},
    }
    for section, values in overrides.items():
        body[section].update(values)
    return body


class TestVehicleAPI:
    """End-to-end tests through the HTTP surface."""

    @pytest.fixture
    async def client(self, container):
        app = create_app(container)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client

    async def test_modify_vehicle(self, client):
        response = await client.post("/api/vehiculo/modificar", json=modification_body())

        assert response.status_code == 200
        data = response.json()
        assert data["vehicleId"] == VEHICLE_ID
        assert data["status"] == "ok"
        assert data["vehicleUpdated"] is True
        assert data["insuranceUpdated"] is True
        assert "tipo:Sedán" in data["createdCatalogEntries"]
        assert data["states"][-1] == "Done"
        assert "X-Request-ID" in response.headers

    async def test_partial_success_is_multi_status(self, client):
        response = await client.post(
            "/api/vehiculo/modificar",
            json=modification_body(insurancePolicy={"concessionId": 999}),
        )

        assert response.status_code == 207
        data = response.json()
        assert data["status"] == "partial"
        assert data["vehicleUpdated"] is True
        assert data["insuranceUpdated"] is False
        assert data["insuranceError"]

    async def test_unknown_serial_is_not_found(self, client):
        response = await client.post(
            "/api/vehiculo/modificar",
            json=modification_body(vehicleAttributes={"serial": "UNKNOWN"}),
        )

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"

    async def test_domain_validation_error(self, client):
        response = await client.post(
            "/api/vehiculo/modificar",
            json=modification_body(vehicleAttributes={"make": " ", "year": 1800}),
        )

        assert response.status_code == 400
        errors = response.json()["detail"]["details"]["errors"]
        assert "make is required" in errors

    async def test_malformed_body_is_bad_request(self, client):
        body = modification_body()
        del body["vehicleAttributes"]["serial"]
        body["insurancePolicy"]["issueDate"] = "not-a-date"

        response = await client.post("/api/vehiculo/modificar", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert len(data["details"]["errors"]) == 2

    async def test_get_vehicle(self, client):
        response = await client.get(f"/api/vehiculo/{VEHICLE_ID}")

        assert response.status_code == 200
        data = response.json()
        assert data["serial"] == "NIV12345"
        assert data["status"] == "Activo"
        assert data["assignedPlate"] == "A123BCD"

    async def test_get_missing_vehicle(self, client):
        response = await client.get("/api/vehiculo/9999")

        assert response.status_code == 404

    async def test_search_by_plate(self, client):
        response = await client.get("/api/vehiculo/buscar", params={"placa": "A123BCD"})

        assert response.status_code == 200
        assert [v["vehicleId"] for v in response.json()] == [VEHICLE_ID]

    async def test_search_by_engine_number(self, client):
        response = await client.get("/api/vehiculo/buscar", params={"numMotor": "MTR002"})

        assert response.status_code == 200
        assert response.json()[0]["serial"] == "NIV99999"

    async def test_search_requires_a_filter(self, client):
        response = await client.get("/api/vehiculo/buscar")

        assert response.status_code == 400

    async def test_search_without_match(self, client):
        response = await client.get("/api/vehiculo/buscar", params={"numSerie": "NOPE"})

        assert response.status_code == 404

    async def test_get_insurance(self, client):
        assert (await client.get(f"/api/concesion/{CONCESSION_ID}/seguro")).status_code == 404

        await client.post("/api/vehiculo/modificar", json=modification_body())
        response = await client.get(f"/api/concesion/{CONCESSION_ID}/seguro")

        assert response.status_code == 200
        data = response.json()
        assert data["policyNumber"] == "POL-2026-001"
        assert data["issueDate"] == "2026-01-01"

    async def test_refresh_status_catalog(self, client):
        response = await client.post("/api/catalogos/estatus/refrescar")

        assert response.status_code == 200
        data = response.json()
        assert data["refreshed"] is True
        assert data["entries"] == 2

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["databases"] == {"vehicle": True, "concession": True, "users": True}
