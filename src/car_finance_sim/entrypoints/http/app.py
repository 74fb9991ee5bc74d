from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from car_finance_sim.entrypoints.http.exception_handlers import register_exception_handlers
from car_finance_sim.entrypoints.http.routes.finance import router as finance_router
from car_finance_sim.entrypoints.http.routes.health import router as health_router
from car_finance_sim.entrypoints.http.routes.scenarios import router as scenarios_router
from car_finance_sim.infra import config
from car_finance_sim.infra.logging_setup import configure_logging


def build_app() -> FastAPI:
    configure_logging(config.log_level())

    app = FastAPI(
        title="Car Finance Simulator API",
        description="""
        Educational car finance calculator and what-if simulator.

        ## Features
        - Calculate standard loan and PCP (balloon/GMFV) repayments
        - First-year amortization schedule
        - Step through a scenario story that changes the loan and recomputes it

        ## State
        The API is stateless. Scenario state is returned to the client and
        sent back with each choice.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allowed_origins(),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(finance_router, prefix="/v1")
    app.include_router(scenarios_router, prefix="/v1")

    return app


app = build_app()
