from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from mister_deejay.application.get_form_config.models import FormConfigResponse
from mister_deejay.application.get_form_config.use_case import GetFormConfigUseCase
from mister_deejay.application.submit_contact.outcomes import Redirect, ValidationFailure
from mister_deejay.application.submit_contact.use_case import SubmitContactUseCase
from mister_deejay.container import get_form_config_use_case, get_submit_contact_use_case

TEMPLATES_DIR = Path(__file__).parent / "templates"
CONTACT_FIELDS = ("name", "email", "message")

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _render_contact(
    request: Request,
    config: FormConfigResponse,
    values: dict[str, str | None] | None = None,
    failure: ValidationFailure | None = None,
    status_code: int = 200,
) -> Response:
    errors = {name: failure.messages_for(name) if failure else [] for name in CONTACT_FIELDS}
    return templates.TemplateResponse(
        request,
        "contact.html",
        {"config": config, "values": values or {}, "errors": errors},
        status_code=status_code,
    )


@router.get(
    "/",
    response_class=HTMLResponse,
    tags=["pages"],
    summary="Landing page",
)
async def home(request: Request):
    return templates.TemplateResponse(request, "home.html")


@router.get(
    "/contact",
    response_class=HTMLResponse,
    tags=["pages"],
    summary="Contact form",
)
async def contact_form(
    request: Request,
    config_uc: GetFormConfigUseCase = Depends(get_form_config_use_case),
):
    return _render_contact(request, config_uc.execute())


@router.post(
    "/contact",
    response_class=HTMLResponse,
    tags=["pages"],
    summary="Submit the contact form",
    description="""
Validate the submitted fields and store them as one row of the `messages` table.

* **Valid**: 303 redirect to `/`.
* **Invalid**: 422 with the form re-rendered, submitted values kept and one
  inline message per failing field.
* **Store failure**: 500.
    """,
    responses={
        303: {"description": "Message stored, redirecting to the landing page"},
        422: {"description": "Validation failed; form re-rendered with inline errors"},
        500: {"description": "The message could not be stored"},
    },
)
async def submit_contact(
    request: Request,
    name: str | None = Form(default=None),
    email: str | None = Form(default=None),
    message: str | None = Form(default=None),
    uc: SubmitContactUseCase = Depends(get_submit_contact_use_case),
    config_uc: GetFormConfigUseCase = Depends(get_form_config_use_case),
):
    values = {"name": name, "email": email, "message": message}
    outcome = await uc.execute(values)

    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.path, status_code=303)
    if isinstance(outcome, ValidationFailure):
        return _render_contact(
            request, config_uc.execute(), values=values, failure=outcome, status_code=422
        )
    # Fatal: handled by the app-level StoreError handler
    raise outcome.error


@router.get(
    "/contact/config",
    tags=["contact"],
    summary="Message length bounds",
    response_model=FormConfigResponse,
)
async def form_config(
    config_uc: GetFormConfigUseCase = Depends(get_form_config_use_case),
):
    return config_uc.execute()
