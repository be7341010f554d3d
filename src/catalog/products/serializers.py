"""Product DRF serializers for API output and schema generation.

The serializer operates at the Interface layer (API Views).
Validation of incoming payloads lives in ``ProductValidator``; these
serializers only shape responses and describe them to drf-spectacular.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema_serializer
from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Read serializer for the Product resource."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, coerce_to_string=False)
    sku = serializers.CharField(max_length=100, allow_null=True, required=False)


class PaginationSerializer(serializers.Serializer):
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total = serializers.IntegerField()
    pages = serializers.IntegerField()


@extend_schema_serializer(many=False)
class ProductListSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = ProductSerializer(many=True)
    count = serializers.IntegerField()
    pagination = PaginationSerializer()


class ProductDetailSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = ProductSerializer()


class ProductWriteSerializer(serializers.Serializer):
    """Request body accepted by create and update (documentation only)."""

    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=8, decimal_places=2)
    sku = serializers.CharField(max_length=100, allow_null=True, required=False)


class MessageSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    id = serializers.IntegerField(required=False)
    message = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.IntegerField()
    details = serializers.DictField(child=serializers.CharField(), required=False)
    timestamp = serializers.DateTimeField()
