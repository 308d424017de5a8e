"""Checkout endpoints for the web client.

Each request rebuilds a ``CheckoutService`` for its session and answers
with a snapshot of the state, totals and step gating. Domain errors are
mapped to 400 or 409 with an ``{"error": {...}}`` body.
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from checkout.conf import checkout_settings
from checkout.domain.errors import (
    DomainError,
    ErrorCode,
    InvalidCommandError,
    UnknownCommandError,
)
from checkout.handlers.serializers import COMMAND_SERIALIZERS
from checkout.services.checkout_service import CheckoutService
from checkout.stores.cache_store import CacheCheckoutStore
from checkout.stores.serializers import CheckoutStateSerializer, CheckoutTotalsSerializer

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    ErrorCode.INVALID_STEP: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNKNOWN_COMMAND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_COMMAND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CHECKOUT_NOT_READY: status.HTTP_409_CONFLICT,
}


def _service(request: Request, session_id: str) -> CheckoutService:
    store = CacheCheckoutStore(checkout_settings().cache_alias)
    return CheckoutService(store, session_id, camp_slug=request.query_params.get("campSlug"))


def _snapshot(service: CheckoutService) -> dict:
    return {
        "state": CheckoutStateSerializer(service.state).data,
        "totals": CheckoutTotalsSerializer(service.totals).data,
        "canProceed": service.can_proceed(),
        "stepOrder": [step.value for step in service.step_order],
        "errors": service.step_errors(),
    }


def _error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    if isinstance(error, InvalidCommandError):
        body["details"] = error.errors
    return Response({"error": body}, status=_ERROR_STATUS[error.code])


class CheckoutView(APIView):
    """Handler for GET/DELETE /api/checkout/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        return Response(_snapshot(_service(request, session_id)))

    def delete(self, request: Request, session_id: str) -> Response:
        _service(request, session_id).reset()
        return Response(status=status.HTTP_204_NO_CONTENT)


class CheckoutCommandView(APIView):
    """Handler for POST /api/checkout/{session_id}/commands"""

    def post(self, request: Request, session_id: str) -> Response:
        service = _service(request, session_id)
        try:
            command_type = request.data.get("type") if isinstance(request.data, dict) else None
            serializer_class = COMMAND_SERIALIZERS.get(command_type)
            if serializer_class is None:
                raise UnknownCommandError(str(command_type))
            serializer = serializer_class(data=request.data)
            if not serializer.is_valid():
                raise InvalidCommandError(serializer.errors)
            serializer.apply(service)
        except DomainError as error:
            logger.info("Rejected checkout command for %s: %s", session_id, error)
            return _error_response(error)
        return Response(_snapshot(service))


class RegistrationPayloadView(APIView):
    """Handler for GET /api/checkout/{session_id}/registration"""

    def get(self, request: Request, session_id: str) -> Response:
        try:
            payload = _service(request, session_id).build_registration_payload()
        except DomainError as error:
            return _error_response(error)
        return Response(payload)
