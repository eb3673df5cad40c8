from rest_framework import serializers

from .models import Institution


class InstitutionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Institution
        fields = ["id", "name", "url_suffix", "logo_image", "theme_name", "active"]
        read_only_fields = ["id", "active"]

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise serializers.ValidationError("Name must have at least 3 characters")
        return value

    def validate_url_suffix(self, value: str) -> str:
        return value.strip()
