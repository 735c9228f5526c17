from fastapi import APIRouter

from app.scoring import badge_catalog
from app.taxonomy import get_default_taxonomy_provider

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    taxonomy = get_default_taxonomy_provider()
    return {
        "status": "healthy",
        "roles": len(taxonomy.role_names()),
        "skills": len(taxonomy.known_skills()),
        "badges": len(badge_catalog()),
    }
