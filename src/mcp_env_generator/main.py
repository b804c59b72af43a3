import logging
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from .core.config import get_settings
from .generator.logic import generate_env_files, generate_env_loader
from .generator.models import EnvExampleRequest

# Use Uvicorn's error logger so app logs appear in the standard server log stream.
logger = logging.getLogger("uvicorn.error")


def create_app() -> FastAPI:
    settings = get_settings()
    logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    app = FastAPI(
        title=settings.app_title,
        description="Generates the .env.example template and env loader for an MCP server from an OpenAPI spec.",
        version="1.0.0"
    )

    @app.post("/generate-env-example", response_class=Response)
    async def create_env_example(request: EnvExampleRequest):
        """
        Generates a .env.example file from the security schemes of an OpenAPI spec.

        - **openapi_spec**: The OpenAPI 3.x spec as a JSON object.
        - **with_analytics**: Add the MCPcat project variables.
        - **with_tracing**: Add the OpenTelemetry collector endpoint.

        Returns the .env.example file.
        """
        try:
            env_example_bytes, _ = generate_env_files(request)
            logger.debug("Generated .env.example (%d bytes)", len(env_example_bytes))
            return Response(
                content=env_example_bytes,
                media_type="text/plain",
                headers={"Content-Disposition": "attachment; filename=.env.example"}
            )
        except Exception as e:
            logger.exception("Error generating .env.example")
            raise HTTPException(status_code=500, detail=f"Failed to generate .env.example: {str(e)}")

    @app.get("/generate-env-loader", response_class=Response)
    async def create_env_loader():
        """
        Generates the env loader module the MCP server imports at startup.

        Returns env_config.py.
        """
        try:
            loader_bytes = generate_env_loader().encode('utf-8')
            logger.debug("Generated env loader (%d bytes)", len(loader_bytes))
            return Response(
                content=loader_bytes,
                media_type="text/x-python",
                headers={"Content-Disposition": "attachment; filename=env_config.py"}
            )
        except Exception as e:
            logger.exception("Error generating env loader")
            raise HTTPException(status_code=500, detail=f"Failed to generate env loader: {str(e)}")

    return app


app = create_app()
