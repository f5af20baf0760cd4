import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from citytrip.config import settings
from citytrip.exceptions import InvalidRouteRequestError
from citytrip.models.request import PlanRouteBody
from citytrip.models.response import PlanRouteResponse
from citytrip.services.map.quota import provider_quota
from citytrip.services.route_service import RoutePlannerService

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="CityTrip API",
    description="Subway, taxi and hybrid trip recommendations",
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

route_planner = RoutePlannerService()


@app.post("/api/routes/plan", response_model=PlanRouteResponse)
async def plan_route(body: PlanRouteBody):
    """Plan a trip between two points"""
    if not body.start or not body.end:
        raise HTTPException(status_code=400, detail="Missing start or end point")

    params = {
        "origin": {**body.start, "name": body.start.get("name") or "Start"},
        "destination": {**body.end, "name": body.end.get("name") or "End"},
        "time": body.time,
        "preference": body.preference or "balance",
        "options": body.options,
    }

    try:
        result = await route_planner.plan_route(params)
    except InvalidRouteRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Route planning failed")
        raise HTTPException(
            status_code=500, detail=f"Route planning failed: {str(e)}"
        )

    return PlanRouteResponse(data=result)


@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "ok",
        "version": settings.api_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "provider_quota": provider_quota.snapshot(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
