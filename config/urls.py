from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('apps.tax.urls')),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.businesses.urls')),
    path('api/', include('apps.invoices.urls')),
    path('api/', include('apps.catalog.urls')),
]
