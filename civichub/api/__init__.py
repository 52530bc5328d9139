"""
API - Flask blueprinti (v1 korisnicki API i admin API).
"""
