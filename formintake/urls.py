from django.contrib import admin
from django.urls import include, path, re_path

from apps.health.views import endpoint_not_found

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("apps.intake.urls")),
    path("api/", include("apps.health.urls")),
    # JSON 404 for everything else; must stay last
    re_path(r"^.*$", endpoint_not_found),
]

handler500 = "apps.health.views.server_error"
