from django.urls import path, include
from django.contrib import admin
from rest_framework_simplejwt.views import TokenRefreshView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include("ecoride_main_app.urls")),
    path('api/', include("wallet.urls")),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
