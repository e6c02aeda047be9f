"""
DRF serializers for the webhooks app.

Usage:
    serializer = ZapierEventSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    client.send(**serializer.validated_data)
"""

from __future__ import annotations

from rest_framework import serializers


class ZapierEventSerializer(serializers.Serializer):
    """
    Serializer for events forwarded to Zapier.

    Fields:
        action: Event name Zapier routes on (required)
        data: Event body, a JSON object (defaults to {})
    """

    action = serializers.CharField(
        max_length=100,
        help_text="Event name, e.g. sms_reply",
    )
    data = serializers.DictField(
        required=False,
        default=dict,
        help_text="Event body forwarded verbatim",
    )
