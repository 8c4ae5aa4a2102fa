from __future__ import annotations

import os

from fastapi import FastAPI

from ..features.drill import DrillManager, create_drill_router


def create_app(manager: DrillManager | None = None) -> FastAPI:
    application = FastAPI(title="Position Trainer", version="1.0.0")
    application.state.manager = manager if manager is not None else DrillManager()
    application.include_router(create_drill_router(application.state.manager))

    @application.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()


def main() -> None:  # pragma: no cover - runner
    import uvicorn

    host = os.environ.get("BIND", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host=host, port=port, factory=False)


if __name__ == "__main__":  # pragma: no cover
    main()
