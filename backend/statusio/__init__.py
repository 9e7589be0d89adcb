"""
Statusio - Statut premium multi-providers debrid.
"""
__version__ = "1.1.20"
