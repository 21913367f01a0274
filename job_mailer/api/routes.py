"""HTTP surface: the spreadsheet upload endpoint and error responses."""

import asyncio
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from job_mailer.domain.exceptions import RequestRejectedError
from job_mailer.logging import get_logger, log_context, new_request_id
from job_mailer.recipients import read_first_sheet, recipients_from_table

from .uploads import remove_upload, save_upload
from .validation import check_upload, parse_job_payload

logger = get_logger(__name__, component="api")

router = APIRouter(prefix="/api", tags=["notifications"])

COMPLETED_MESSAGE = "Email sending process completed"


@router.post("/send-emails")
async def send_emails(
    request: Request,
    file: Optional[UploadFile] = File(None),
    job: Optional[str] = Form(None),
):
    """Email the posted job to every recipient listed in the spreadsheet."""
    env_config = request.app.state.env_config
    dispatcher = request.app.state.dispatcher

    with log_context(request_id=new_request_id()):
        logger.info(
            "Received send-emails request",
            extra={
                "event": "request.received",
                "upload_filename": getattr(file, "filename", None),
            },
        )

        # Rejected before anything touches the disk
        check_upload(file)

        upload_path: Optional[Path] = None
        try:
            upload_path = await save_upload(file, env_config.upload_dir)
            job_posting = parse_job_payload(job)
            table = await asyncio.to_thread(read_first_sheet, upload_path)
            recipients = recipients_from_table(table)
            results = await dispatcher.dispatch(job_posting, recipients)
        except RequestRejectedError:
            raise
        except Exception as e:
            logger.error(
                f"Error in /api/send-emails: {e}",
                exc_info=True,
                extra={"event": "request.failed", "error_type": type(e).__name__},
            )
            return JSONResponse(status_code=500, content={"error": f"Server error: {e}"})
        finally:
            if upload_path is not None:
                remove_upload(upload_path)

        logger.info(
            f"Processed {len(results)} recipients",
            extra={"event": "request.completed", "recipient_count": len(results)},
        )
        return {
            "message": COMPLETED_MESSAGE,
            "results": [result.to_dict() for result in results],
        }


async def handle_rejection(request: Request, exc: RequestRejectedError) -> JSONResponse:
    logger.info(
        f"Rejected request: {exc.message}",
        extra={"event": "request.rejected", "code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


async def handle_malformed_form(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Multipart bodies FastAPI cannot bind are client errors like any other."""
    details = "; ".join(error.get("msg", "") for error in exc.errors())
    logger.info(
        f"Malformed request body: {details}",
        extra={"event": "request.rejected", "code": "MalformedRequest", "path": request.url.path},
    )
    return JSONResponse(
        status_code=400,
        content={"error": f"Malformed request: {details}", "code": "MalformedRequest"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestRejectedError, handle_rejection)
    app.add_exception_handler(RequestValidationError, handle_malformed_form)
