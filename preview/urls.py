from django.urls import path

from .views import PreviewDocumentView, PreviewView

app_name = "preview"

urlpatterns = [
    path("render/", PreviewView.as_view(), name="render"),
    path("document/", PreviewDocumentView.as_view(), name="document"),
]
