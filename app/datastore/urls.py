"""
URL configuration for the datastore app.

Routes:
    - GET /connection-test/ - Supabase connectivity probe

All routes are prefixed with /api/v1/datastore/ when included in the main URLconf.
"""

from django.urls import path

from datastore.views import supabase_connection_test

app_name = "datastore"

urlpatterns = [
    path(
        "connection-test/",
        supabase_connection_test,
        name="supabase_connection_test",
    ),
]
