"""HTTP server for upload/download format conversion."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn
from fastapi import FastAPI, File, Form, HTTPException, UploadFile, status
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict

from omniconvert import __version__
from omniconvert.converter.core import (
    ConversionRequest,
    content_disposition,
    convert_upload_bytes,
    header_filename,
    parse_options_json,
)
from omniconvert.converters import converter_for, parse_kind
from omniconvert.errors import ConversionError
from omniconvert.types import CONVERTER_KINDS, ConverterKind

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ReadyResponse(BaseModel):
    """Readiness response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ConverterInfo(BaseModel):
    """Description of one available converter."""

    model_config = ConfigDict(extra="forbid")

    kind: str
    accepted_types: list[str]
    output_media_type: str


class ConvertersResponse(BaseModel):
    """Converter listing payload."""

    model_config = ConfigDict(extra="forbid")

    converters: list[ConverterInfo]


def _resolve_kind(value: str) -> ConverterKind:
    try:
        return parse_kind(value)
    except ConversionError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def create_app() -> FastAPI:
    """Create the conversion HTTP application."""
    app = FastAPI(
        title="OmniConvert",
        version=__version__,
        description="Upload CSV, JSON, XML, Markdown or Base64 files and download the converted output.",
    )

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/readyz", response_model=ReadyResponse)
    async def readyz() -> ReadyResponse:
        return ReadyResponse(status="ready")

    @app.get("/v1/converters", response_model=ConvertersResponse)
    async def list_converters() -> ConvertersResponse:
        infos: list[ConverterInfo] = []
        for kind in CONVERTER_KINDS:
            converter = converter_for(kind)
            infos.append(
                ConverterInfo(
                    kind=kind,
                    accepted_types=list(converter.accepted_types),
                    output_media_type=converter.output_media_type,
                )
            )
        return ConvertersResponse(converters=infos)

    @app.post("/v1/convert/{kind}")
    async def convert_upload(
        kind: str,
        file: UploadFile = File(...),
        options: str | None = Form(default=None),
        expected_sha256: str | None = Form(default=None),
    ) -> Response:
        """Convert an uploaded file and return the converted bytes."""
        resolved = _resolve_kind(kind)
        payload = await file.read()
        if not payload:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="uploaded file is empty",
            )
        try:
            request = ConversionRequest(
                kind=resolved,
                filename=file.filename or "upload.bin",
                media_type=file.content_type,
                expected_sha256=expected_sha256,
                options=parse_options_json(options),
            )
            input_sha, outcome = convert_upload_bytes(payload, request)
        except (ValueError, ConversionError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from exc
        except Exception as exc:  # pragma: no cover
            logger.exception("unexpected error during HTTP conversion upload")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc

        headers = {
            "X-Input-SHA256": input_sha,
            "X-Output-SHA256": outcome.output_sha256,
            "X-Output-Filename": header_filename(outcome.output_filename),
            "X-Input-Size": str(outcome.input_size_bytes),
            "X-Output-Size": str(outcome.output_size_bytes),
            "Content-Disposition": content_disposition(outcome.output_filename),
        }
        return Response(
            content=outcome.output_bytes,
            media_type=outcome.output_media_type,
            headers=headers,
        )

    return app


app = create_app()


def main() -> None:
    """Run the conversion HTTP entrypoint."""
    parser = argparse.ArgumentParser(description="OmniConvert HTTP server.")
    parser.add_argument(
        "--host",
        default=os.getenv("OMNICONVERT_HTTP_HOST", "0.0.0.0"),
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("OMNICONVERT_HTTP_PORT", "8090")),
    )
    args = parser.parse_args()
    uvicorn.run(
        "omniconvert.converter.http_server:app",
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
