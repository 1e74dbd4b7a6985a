from django.contrib import admin
from django.urls import path, include

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('admin/', admin.site.urls),

    # Public REST API (API key auth, one organization per key)
    path('api/public/v1/', include('apps.contacts.urls')),

]
