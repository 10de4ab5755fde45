"""Root URL configuration.

The presentation layer lives outside this project; only the admin is
routed here.
"""

from django.contrib import admin
from django.urls import path

urlpatterns = [
    path('admin/', admin.site.urls),
]
