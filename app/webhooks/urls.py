"""
URL configuration for the webhooks app.

Routes:
    - POST /zapier/ - Zapier payload receiver
    - GET /zapier/config-test/ - Receiver configuration probe
    - POST /zapier/send/ - Forward an event to Zapier

All routes are prefixed with /api/v1/webhooks/ when included in the main URLconf.
"""

from django.urls import path

from webhooks.views import ZapierSendView, zapier_config_test, zapier_webhook

app_name = "webhooks"

urlpatterns = [
    path("zapier/", zapier_webhook, name="zapier_webhook"),
    path("zapier/config-test/", zapier_config_test, name="zapier_config_test"),
    path("zapier/send/", ZapierSendView.as_view(), name="zapier_send"),
]
