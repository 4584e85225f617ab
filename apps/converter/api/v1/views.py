"""
Views for the converter API v1.
Thin HTTP shell around the ConversionEngine; domain errors are mapped to
responses by the converter exception handler.
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.converter.api.v1.serializers import (
    ConversionRequestSerializer,
    ConversionResponseSerializer,
    CurrenciesResponseSerializer,
)
from apps.converter.domain.services import get_conversion_engine


@extend_schema(tags=['Converter'])
class ConverterViewSet(viewsets.ViewSet):

    @extend_schema(
        responses=CurrenciesResponseSerializer,
        description="List every supported currency with its rate relative to the base currency"
    )
    @action(detail=False, methods=['get'], url_path='currencies')
    def currencies(self, request):
        rates = get_conversion_engine().available_rates()
        serializer = CurrenciesResponseSerializer({
            "base_currency": rates.base_currency,
            "currencies": rates.as_dict(),
        })
        return Response(serializer.data)

    @extend_schema(
        request=ConversionRequestSerializer,
        responses=ConversionResponseSerializer,
        description="Convert an amount from one currency to another through the base currency"
    )
    @action(detail=False, methods=['post'], url_path='convert')
    def convert(self, request):
        request_serializer = ConversionRequestSerializer(data=request.data)
        request_serializer.is_valid(raise_exception=True)
        data = request_serializer.validated_data

        result = get_conversion_engine().convert(data["from"], data["to"], data["amount"])

        serializer = ConversionResponseSerializer({
            "from": data["from"],
            "to": data["to"],
            "amount": data["amount"],
            "converted_amount": result.converted_amount,
            "rate": result.effective_rate,
        })
        return Response(serializer.data)
