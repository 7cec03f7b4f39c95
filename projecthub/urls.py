from django.contrib import admin
from django.urls import include, path
from django.conf import settings
from django.conf.urls.static import static
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/token/", TokenObtainPairView.as_view(), name='token-obtain-pair'),
    path("api/auth/token/refresh/", TokenRefreshView.as_view(), name='token-refresh'),
    path("api/", include("apps.catalog.urls")),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
