"""
STCH vehicular service.

REST API over the concessions, vehicles and users databases of the
Sistema de Transporte Convencional de Hidalgo.
"""

__version__ = "0.1.0"
