"""
Serializers for the converter API.
Handles request validation and response shaping; conversion rules live in
the domain layer.
"""

from rest_framework import serializers


class ConversionRequestSerializer(serializers.Serializer):
    # Exposed as "from" and "to", which are not valid attribute names.
    # Codes are upper-cased only; padding is left for the length check.
    source_currency = serializers.CharField(trim_whitespace=False, help_text="Source currency code (e.g. EUR)")
    target_currency = serializers.CharField(trim_whitespace=False, help_text="Target currency code (e.g. USD)")
    amount = serializers.FloatField(help_text="Amount to convert")

    def get_fields(self):
        fields = super().get_fields()
        fields["from"] = fields.pop("source_currency")
        fields["to"] = fields.pop("target_currency")
        return fields

    def validate(self, attrs):
        attrs["from"] = attrs["from"].upper()
        attrs["to"] = attrs["to"].upper()
        return attrs


class ConversionResponseSerializer(serializers.Serializer):
    amount = serializers.FloatField()
    converted_amount = serializers.FloatField()
    rate = serializers.FloatField()

    def get_fields(self):
        fields = super().get_fields()
        fields["from"] = serializers.CharField()
        fields["to"] = serializers.CharField()
        return fields


class CurrenciesResponseSerializer(serializers.Serializer):
    base_currency = serializers.CharField()
    currencies = serializers.DictField(child=serializers.FloatField())
