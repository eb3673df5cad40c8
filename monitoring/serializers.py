from rest_framework import serializers

from .models import ClientConnection, ClientEvent


class ClientConnectionSerializer(serializers.ModelSerializer):
    institution_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ClientConnection
        fields = [
            "id",
            "institution_id",
            "exam_id",
            "status",
            "connection_token",
            "user_session_id",
            "client_address",
            "created_at",
        ]
        read_only_fields = fields


class ClientEventSerializer(serializers.ModelSerializer):
    connection_id = serializers.IntegerField(read_only=True)
    type = serializers.SerializerMethodField()

    class Meta:
        model = ClientEvent
        fields = ["id", "connection_id", "type", "timestamp", "numeric_value", "text"]
        read_only_fields = fields

    def get_type(self, obj: ClientEvent) -> str:
        return obj.get_type_display()
