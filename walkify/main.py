import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from walkify.config import settings
from walkify.config.log_config import configure_logging
from walkify.config.place_types import DEFAULT_EXPLORATION_CATEGORIES
from walkify.exceptions import RouteGenerationError
from walkify.models.place import Place
from walkify.models.request import NearbyPoisQuery, ParseQuery, RouteRequest, TextRouteQuery
from walkify.models.response import RouteResult
from walkify.services.nlp_service import NLPService
from walkify.services.route_service import RouteService

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Walkify API",
    description="Walk route generation from Ukrainian free-text requests",
    version=settings.api_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

route_service = RouteService(settings)
nlp_service = NLPService(route_service.parser)


# main api
@app.post("/api/v1/routes/query", response_model=RouteResult)
async def generate_route_from_query(request: TextRouteQuery):
    """Generate a walking route from a natural language request and the user location"""
    try:
        return await route_service.generate_route_from_text(
            request.origin.to_lng_lat(), request.text, route_mode=request.route_mode
        )
    except RouteGenerationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("Route generation failed")
        raise HTTPException(
            status_code=500, detail=f"Route generation failed: {str(e)}"
        )


@app.post("/parse", response_model=RouteRequest)
async def parse_route_request(request: ParseQuery):
    """Expose the parsing pipeline as an API endpoint."""
    try:
        return await nlp_service.parse_query(request.text)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Parsing failed: {str(e)}")


@app.post("/api/v1/pois/nearby", response_model=List[Place])
async def search_nearby_pois(request: NearbyPoisQuery):
    """Search points of interest around a location"""
    categories = request.categories or list(DEFAULT_EXPLORATION_CATEGORIES)
    try:
        return await route_service.aggregator.search_nearby_pois(
            request.center.to_lng_lat(),
            categories,
            radius_m=request.radius_m,
            limit_per_type=request.limit_per_type,
        )
    except Exception as e:
        logger.exception("POI search failed")
        raise HTTPException(status_code=500, detail=f"POI search failed: {str(e)}")


@app.get("/health")
async def health_check():
    """Health check"""
    return {"status": "healthy", "version": settings.api_version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
