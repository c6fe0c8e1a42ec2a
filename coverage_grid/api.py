from fastapi import APIRouter, FastAPI, HTTPException, Query, Request

from coverage_grid.config import ServiceSettings
from coverage_grid.database import InMemoryScheduleRepository, ScheduleRepository
from coverage_grid.dates import parse_date_param
from coverage_grid.engine import ScheduleRequest, build_schedule
from coverage_grid.errors import ScheduleFetchError, ScheduleValidationError
from coverage_grid.schemas import ScheduleResponse

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(
    request: Request,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    county: str | None = Query(default=None),
) -> ScheduleResponse:
    repository: ScheduleRepository = request.app.state.repository
    settings: ServiceSettings = request.app.state.settings

    if not start_date or not end_date:
        raise HTTPException(
            status_code=400, detail="startDate and endDate are required"
        )

    try:
        schedule_request = ScheduleRequest(
            start_date=parse_date_param(start_date, "startDate"),
            end_date=parse_date_param(end_date, "endDate"),
            county=county,
        )
        return await build_schedule(repository, schedule_request, settings)
    except ScheduleValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ScheduleFetchError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def create_app(
    repository: ScheduleRepository | None = None,
    settings: ServiceSettings | None = None,
) -> FastAPI:
    app = FastAPI()
    app.state.repository = (
        repository if repository is not None else InMemoryScheduleRepository()
    )
    app.state.settings = settings or ServiceSettings.from_env()

    app.include_router(router)
    return app
