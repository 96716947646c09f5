"""Configuration des URLs Django pour les templates de documents."""

from django.urls import path

from devispack.contrib.django.views import (
    LivePreviewView,
    LocaleDetectionView,
    TemplateListView,
    TemplatePreviewView,
)

app_name = "devispack"

urlpatterns = [
    path(
        "templates/",
        TemplateListView.as_view(),
        name="template-list",
    ),
    path(
        "templates/preview/",
        LivePreviewView.as_view(),
        name="live-preview",
    ),
    path(
        "templates/<str:template_id>/preview/",
        TemplatePreviewView.as_view(),
        name="template-preview",
    ),
    path(
        "locale/detect/",
        LocaleDetectionView.as_view(),
        name="detect-locale",
    ),
]
