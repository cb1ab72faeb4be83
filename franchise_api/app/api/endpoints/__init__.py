"""
Endpoint subpackage.

Each module in this package defines an APIRouter for a specific
domain.  Domain routers are aggregated in ``api/router.py``; the health
router is mounted at the application root.
"""
