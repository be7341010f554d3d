"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Every service outcome arrives as a ``ServiceResult``; this module
only maps its ``kind`` onto a status code and a JSON envelope:

- validation / storage failures -> 422 ``{error, code, details, timestamp}``
- not found                     -> 404 ``{error, code, timestamp}``
- malformed body                -> 400 ``{error, code, timestamp}``
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response

from catalog.core.results import ErrorKind, ServiceResult
from catalog.products.repositories.django_repository import ProductDjangoRepository
from catalog.products.serializers import (
    ErrorSerializer,
    MessageSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductSerializer,
    ProductWriteSerializer,
)
from catalog.products.services import ProductService

logger = structlog.get_logger(__name__)

ERROR_RESPONSES = {
    400: ErrorSerializer,
    404: ErrorSerializer,
    422: ErrorSerializer,
}


def error_response(
    message: str,
    code: int,
    details: Optional[Dict[str, str]] = None,
) -> Response:
    body: Dict[str, Any] = {"error": message, "code": code}
    if details:
        body["details"] = details
    body["timestamp"] = timezone.now().isoformat()
    return Response(body, status=code)


def failure_response(result: ServiceResult) -> Response:
    """Render a failed ``ServiceResult`` as an HTTP error envelope."""
    if result.is_not_found:
        return error_response("Product not found", status.HTTP_404_NOT_FOUND)

    details = result.errors
    if details is None:
        key = "id" if result.kind is ErrorKind.VALIDATION else "general"
        details = {key: result.error or "Unknown error"}
    return error_response(
        "Validation failed", status.HTTP_422_UNPROCESSABLE_ENTITY, details
    )


def invalid_payload() -> Response:
    return error_response("Invalid payload", status.HTTP_400_BAD_REQUEST)


class ProductViewSet(viewsets.ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def _payload(self, request: Request) -> Optional[Dict[str, Any]]:
        """The JSON object body, or ``None`` when it is malformed or not an object."""
        try:
            data = request.data
        except ParseError:
            logger.info("product.invalid_payload", path=request.path)
            return None
        if not isinstance(data, dict):
            logger.info("product.invalid_payload", path=request.path)
            return None
        return data

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(responses={200: ProductListSerializer, **ERROR_RESPONSES})
    def list(self, request: Request) -> Response:
        """GET /api/products?page=&limit=&q="""
        params = {
            key: request.query_params.get(key)
            for key in ("page", "limit", "q")
            if key in request.query_params
        }
        result = self._service.get_products(params)
        if not result.success:
            return failure_response(result)

        body = result.to_dict()
        body["data"] = ProductSerializer(result.data, many=True).data
        return Response(body)

    @extend_schema(responses={200: ProductDetailSerializer, **ERROR_RESPONSES})
    def retrieve(self, request: Request, pk: Optional[str] = None) -> Response:
        """GET /api/products/{pk}"""
        result = self._service.get_product_by_id(pk)
        if not result.success:
            return failure_response(result)
        return Response({"success": True, "data": ProductSerializer(result.data).data})

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        request=ProductWriteSerializer,
        responses={201: MessageSerializer, **ERROR_RESPONSES},
    )
    def create(self, request: Request) -> Response:
        """POST /api/products"""
        data = self._payload(request)
        if data is None:
            return invalid_payload()

        result = self._service.create_product(data)
        if not result.success:
            return failure_response(result)
        return Response(
            {
                "success": True,
                "id": result.id,
                "message": "Product created successfully",
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=ProductWriteSerializer,
        responses={200: MessageSerializer, **ERROR_RESPONSES},
    )
    def update(self, request: Request, pk: Optional[str] = None) -> Response:
        """PUT/PATCH /api/products/{pk}"""
        data = self._payload(request)
        if data is None:
            return invalid_payload()

        result = self._service.update_product(pk, data)
        if not result.success:
            return failure_response(result)
        return Response({"success": True, "message": "Product updated successfully"})

    @extend_schema(
        request=ProductWriteSerializer,
        responses={200: MessageSerializer, **ERROR_RESPONSES},
    )
    def partial_update(self, request: Request, pk: Optional[str] = None) -> Response:
        """PATCH /api/products/{pk}"""
        return self.update(request, pk)

    @extend_schema(responses={200: MessageSerializer, 404: ErrorSerializer, 422: ErrorSerializer})
    def destroy(self, request: Request, pk: Optional[str] = None) -> Response:
        """DELETE /api/products/{pk}"""
        result = self._service.delete_product(pk)
        if not result.success:
            return failure_response(result)
        return Response({"success": True, "message": "Product deleted successfully"})
