# api/interfaces/api/main.py
from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from api.infrastructure.config import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    from api.infrastructure.estado import get_estado
    get_estado()  # carrega o documento persistido no startup
    yield


settings = get_settings()

app = FastAPI(
    title="Gestao de Carteiras API",
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response  # type: ignore[return-value]


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["*"],
)

from api.interfaces.api.routes.agencia_routes import router as agencia_router  # noqa: E402
from api.interfaces.api.routes.analise_routes import router as analise_router  # noqa: E402
from api.interfaces.api.routes.dimensionamento_routes import router as dimensionamento_router  # noqa: E402
from api.interfaces.api.routes.export_routes import router as export_router  # noqa: E402
from api.interfaces.api.routes.gestor_routes import router as gestor_router  # noqa: E402
from api.interfaces.api.routes.importacao_routes import router as importacao_router  # noqa: E402
from api.interfaces.api.routes.realocacao_routes import router as realocacao_router  # noqa: E402

app.include_router(gestor_router, prefix="/api")
app.include_router(agencia_router, prefix="/api")
app.include_router(realocacao_router, prefix="/api")
app.include_router(dimensionamento_router, prefix="/api")
app.include_router(analise_router, prefix="/api")
app.include_router(export_router, prefix="/api")
app.include_router(importacao_router, prefix="/api")
