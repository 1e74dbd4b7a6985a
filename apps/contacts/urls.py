from django.urls import re_path
from . import views

app_name = 'contacts'

# Trailing slash is optional so "/contacts" and "/contacts/" both work for POST/PATCH
urlpatterns = [
    re_path(r'^contacts/?$', views.contact_collection_view, name='contact_collection'),
    re_path(r'^contacts/(?P<contact_id>[^/]+)/?$', views.contact_detail_view, name='contact_detail'),
]
