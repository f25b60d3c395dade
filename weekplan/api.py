# weekplan/api.py
import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry, Counter, Summary, make_asgi_app

from .config import Settings, configure_logging
from .models import CycleDetected
from .scheduler import generate_schedule
from .schemas import CYCLE_RESPONSE, INTERNAL_ERROR_RESPONSE, ScheduleRequest, ScheduleResponse

logger = logging.getLogger(__name__)


def create_app(registry: CollectorRegistry = None) -> FastAPI:
    """
    Build the HTTP app. Each app gets its own metrics registry unless one
    is passed in, so several apps can live in one process (tests).
    """
    registry = registry or CollectorRegistry()
    schedule_time = Summary(
        "schedule_generation_seconds",
        "Time spent generating a weekly schedule",
        registry=registry,
    )
    runs = Counter(
        "schedule_runs_total",
        "Scheduling runs by outcome",
        ["outcome"],
        registry=registry,
    )

    app = FastAPI(title="weekplan")
    app.mount("/metrics", make_asgi_app(registry=registry))

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "weekplan"}

    @app.post("/api/schedule")
    def schedule(request: ScheduleRequest):
        try:
            with schedule_time.time():
                result = generate_schedule(request.to_tasks(), request.to_prefs())
        except CycleDetected:
            runs.labels(outcome="cycle").inc()
            return CYCLE_RESPONSE
        except Exception:
            logger.exception("Scheduling run failed")
            runs.labels(outcome="error").inc()
            return JSONResponse(status_code=500, content=INTERNAL_ERROR_RESPONSE)

        runs.labels(outcome="ok").inc()
        return ScheduleResponse.from_result(result).to_payload()

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Scheduler API running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
