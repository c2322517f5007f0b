"""
printfmt Main module - command line and HTTP entry points
"""

import logging
import time
from typing import Any, Dict, List, Optional

import typer
import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.routing import APIRouter
from pydantic import BaseModel, Field

from printfmt.features import Feature, FeatureRegistry, OperationResult
from printfmt.version import get_version

# Module-level logger
logger = logging.getLogger("printfmt.main")


FORMAT_EPILOG = """
Placeholders:

\b
  {}            next argument, in order of appearance
  {0} .. {n}    argument by position, zero indexed
  {name}        argument given as name=value
  {{ and }}     literal braces

Format specifiers go after a colon, e.g. {0:*^10} or {:+#x}:

\b
  fill+align    any character followed by < left, > right or ^ center
  +             always print the sign of a number
  #             add a 0x, 0o or 0b prefix
  0             pad numbers with zeros after the sign
  width         minimum number of characters
  .precision    decimal places of a float
  x X o b       hexadecimal, upper hexadecimal, octal, binary

Examples:

\b
  $ printfmt format "Number {1} and Number {0}!" 2 1
  Number 1 and Number 2!
  $ printfmt format "Number {n} and Number {}!" 2 "n = 1"
  Number 1 and Number 2!
  $ printfmt format "|{1:<5}|{two:^5}|{0:>5}|" 3 1 "two = 2"
  |1    |  2  |    3|
"""


class ErrorResponse(BaseModel):
    """Standard error response model"""

    detail: str


class FormatRequest(BaseModel):
    template: str
    args: List[str] = Field(default_factory=list)


class FormatResponse(BaseModel):
    output: str
    expected_args: int


# Create CLI app with Typer
app = typer.Typer(
    name="printfmt",
    help="printfmt - Rust-style format strings on the command line",
    add_completion=False,
)

# Create FastAPI app for API server
api_app = FastAPI(
    title="printfmt API",
    description="Format strings with positional and named arguments",
    version=get_version(),
)

# API router for versioned endpoints
api_router = APIRouter(prefix="/api/v1")


# ----------------- Helper Functions -----------------


class ElapsedMsFormatter(logging.Formatter):
    """Formatter that shows milliseconds since program start, right-aligned for up to 9999 seconds."""
    def __init__(self, fmt=None, datefmt=None, *args, **kwargs):
        super().__init__(fmt, datefmt, *args, **kwargs)
        self.start_time = time.monotonic()
        self.width = 8  # Enough for '9999000ms'

    def format(self, record):
        elapsed_ms = int((time.monotonic() - self.start_time) * 1000)
        if elapsed_ms < 10**7:  # up to 9999.999s
            elapsed = f"[{elapsed_ms:>{self.width}}ms]"
        else:
            elapsed = f"[{elapsed_ms}ms]"
        record.elapsed = elapsed
        return super().format(record)


VERBOSE_LEVEL = 15  # Between INFO (20) and DEBUG (10)
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """Set up logging configuration"""
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = VERBOSE_LEVEL
    else:
        log_level = logging.INFO
    formatter = ElapsedMsFormatter('%(elapsed)s %(message)s')
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers = []  # Remove any existing handlers
    root.addHandler(handler)
    root.setLevel(log_level)

    # uvicorn configures its own loggers; keep them quiet unless debugging
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)


def _feature_or_exit(feature_name: str) -> Feature:
    feature = FeatureRegistry.get_feature(feature_name)
    if not feature:
        logger.error("Unknown feature: %s", feature_name)
        raise typer.Exit(code=1)
    return feature


def _handle_cli_result(feature_name: str, result: OperationResult) -> Any:
    if not result.success:
        logger.error("%s failed: %s", feature_name, result.error or "Unknown error")
        raise typer.Exit(code=1)
    return result.data


def _feature_or_http_error(feature_name: str) -> Feature:
    feature = FeatureRegistry.get_feature(feature_name)
    if not feature:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{feature_name} feature not found",
        )
    return feature


# ----------------- CLI Commands -----------------


@app.command()
def version() -> None:
    """Show the printfmt version"""
    setup_logging(False)
    data = _handle_cli_result("version", _feature_or_exit("version").handler())
    print(data.get("version", "unknown"))


@app.command(
    "format",
    epilog=FORMAT_EPILOG,
    context_settings={"ignore_unknown_options": True},
)
def format_command(
    template: str = typer.Argument(..., help="Format string with {} placeholders"),
    args: Optional[List[str]] = typer.Argument(
        None, help="Values to substitute, optionally as name=value"
    ),
    debug: bool = typer.Option(False, "--debug", "-D", help="Log parsing and resolution details"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging (between info and debug)"),
) -> None:
    """Substitute ARGS into TEMPLATE and print the result"""
    setup_logging(debug, verbose)
    args = list(args or [])
    logger.debug("printfmt version: %s", get_version())

    feature = _feature_or_exit("format")
    try:
        result = feature.handler(template=template, args=args)
    except Exception as e:
        logger.exception("An unexpected error occurred")
        raise typer.Exit(code=1) from e

    data = _handle_cli_result("format", result)
    print(data["output"])


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", envvar="PRINTFMT_HOST", help="Host to bind the API server"),
    port: int = typer.Option(8000, envvar="PRINTFMT_PORT", help="Port to bind the API server"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
) -> None:
    """Start the printfmt API server"""
    setup_logging(debug)

    logger.info(
        f"Starting printfmt API server version {get_version()} on {host}:{port}"
    )
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(api_app, host=host, port=port)


# ----------------- API Endpoints -----------------


@api_router.get("/version")
async def get_version_endpoint() -> Dict[str, str]:
    """Get printfmt version"""
    result = _feature_or_http_error("version").handler()
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error or "An error occurred",
        )
    return result.data


@api_router.post(
    "/format",
    response_model=FormatResponse,
    responses={400: {"model": ErrorResponse}},
)
async def format_endpoint(request: FormatRequest):
    """Format a template with the given argument tokens"""
    feature = _feature_or_http_error("format")
    try:
        result = feature.handler(template=request.template, args=request.args)
    except Exception as e:
        logger.error("Error in format endpoint: %s", str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error or "An error occurred",
        )
    return result.data


# Include the router in the FastAPI app
api_app.include_router(api_router)


if __name__ == "__main__":
    app()
