from django.urls import include, path

urlpatterns = [
    path("preview/", include("preview.urls")),
]
