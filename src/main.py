import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from .config import get_settings
from .logging_config import configure_logging
from .auth.exceptions import AuthenticationError, MCPGatewayError
from .gateway.exceptions import ToolNotFoundError
from .registry.catalog import get_tool_definitions
from src.gateway.router import router as gateway_router
from src.mcp_transport.sse import router as mcp_sse_router

settings = get_settings()
logger = structlog.get_logger("app")

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(level=settings.MCP_LOG_LEVEL)
    # Fail fast if tool metadata and routing table disagree
    tools = get_tool_definitions()
    logger.info("gateway_started", tools=len(tools), api_url=settings.CLAWSLIST_API_URL)
    yield
    logger.info("gateway_stopped")

app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    debug=settings.DEBUG
)

# Global exception handlers
@app.exception_handler(AuthenticationError)
async def authentication_exception_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=401,
        content={"error": exc.code, "message": exc.message}
    )

@app.exception_handler(ToolNotFoundError)
async def tool_not_found_handler(request: Request, exc: ToolNotFoundError):
    return JSONResponse(
        status_code=404,
        content={"error": exc.code, "message": exc.message}
    )

@app.exception_handler(MCPGatewayError)
async def gateway_exception_handler(request: Request, exc: MCPGatewayError):
    return JSONResponse(
        status_code=500,
        content={"error": exc.code, "message": exc.message}
    )

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME}

# Include routers
app.include_router(gateway_router)
app.include_router(mcp_sse_router)


def run() -> None:
    """Console entry point for the HTTP/SSE transport."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.MCP_LOG_LEVEL.lower())
