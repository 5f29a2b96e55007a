"""Reset password page endpoints.

The API layer stays thin: it moves page state in and out of the page state
store and translates workflow results into HTTP responses. Throttling,
validation and the reset itself live in ``ResetPasswordWorkflow``.

Flow:
1. ``GET`` mounts the page from the link the user followed and stores the
   attempt server-side under a fresh ``page_id``.
2. ``POST /{page_id}`` restores that attempt, applies the submitted
   passwords and runs the reset.
"""

from typing import Annotated, Union

import structlog
from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import RedirectResponse

from panel_auth.adapters.api.v1.auth.schemas import (
    NotificationSchema,
    ResetPasswordPageResponse,
    ResetPasswordResultResponse,
    ResetPasswordSubmitRequest,
)
from panel_auth.core.exceptions import PageExpiredError
from panel_auth.domain.interfaces import INotificationSink, IPageStateStore
from panel_auth.domain.services.password_reset import ResetPasswordWorkflow
from panel_auth.domain.value_objects.auth_context import AuthContext
from panel_auth.infrastructure.dependency_injection.reset_password_dependencies import (
    get_auth_context,
    get_notification_sink,
    get_page_state_store,
    get_reset_password_workflow,
)
from panel_auth.utils.i18n import get_request_language, get_translated_message

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=ResetPasswordPageResponse,
    status_code=status.HTTP_200_OK,
    summary="Mount the reset password page",
    responses={
        303: {"description": "Already authenticated, redirected to the intended URL"},
    },
)
async def mount_reset_password_page(
    request: Request,
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    workflow: Annotated[ResetPasswordWorkflow, Depends(get_reset_password_workflow)],
    page_store: Annotated[IPageStateStore, Depends(get_page_state_store)],
) -> Union[ResetPasswordPageResponse, RedirectResponse]:
    """Mount the page for the ``email``/``token`` pair of a reset link.

    Authenticated users are redirected and nothing is stored.
    """
    language = get_request_language(request)

    redirect = workflow.mount(auth, query=dict(request.query_params), language=language)
    if redirect is not None:
        return RedirectResponse(url=redirect.url, status_code=redirect.status_code)

    attempt = workflow.attempt
    page_id = await page_store.put(attempt)

    return ResetPasswordPageResponse(
        page_id=page_id,
        email=attempt.email,
        title=get_translated_message("reset_password.title", language),
        heading=get_translated_message("reset_password.heading", language),
        submit_label=get_translated_message("reset_password.buttons.reset.label", language),
        form=workflow.form.describe(),
    )


@router.post(
    "/{page_id}",
    response_model=ResetPasswordResultResponse,
    status_code=status.HTTP_200_OK,
    summary="Submit the reset password form",
    responses={
        403: {"description": "Attempt to change the locked email or token"},
        419: {"description": "Unknown or expired page"},
        422: {"description": "Form validation failed"},
    },
)
async def submit_reset_password(
    page_id: str,
    payload: Annotated[ResetPasswordSubmitRequest, Body()],
    workflow: Annotated[ResetPasswordWorkflow, Depends(get_reset_password_workflow)],
    page_store: Annotated[IPageStateStore, Depends(get_page_state_store)],
    notifications: Annotated[INotificationSink, Depends(get_notification_sink)],
) -> ResetPasswordResultResponse:
    """Run ``reset_password`` against the stored page state.

    Throttled and rejected submissions answer ``200`` with the notification
    to show; the page stays mounted so the user can try again.
    """
    attempt = await page_store.get(page_id)
    if attempt is None:
        logger.info("Reset password submission for unknown page", page_id_prefix=page_id[:6])
        raise PageExpiredError()

    request_logger = logger.bind(page_id_prefix=page_id[:6])

    try:
        attempt.fill(payload.to_form_input())
        workflow.restore(attempt)
        response = await workflow.reset_password()
    finally:
        attempt.clear_input()

    pulled = [NotificationSchema.from_domain(n) for n in notifications.pull()]

    if response is not None:
        await page_store.forget(page_id)
        request_logger.info("Reset password page completed", redirect_to=response.url)
        return ResetPasswordResultResponse(
            status="reset", redirect_to=response.url, notifications=pulled
        )

    outcome = "throttled" if workflow.throttled else "rejected"
    request_logger.info("Reset password submission not accepted", outcome=outcome)
    return ResetPasswordResultResponse(status=outcome, notifications=pulled)
