from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # API endpoints
    path('api/accounts/', include('apps.accounts.urls')),
    path('api/', include('apps.chambers.urls')),
]
