from django.urls import include, path

urlpatterns = [
    path("", include("AcademicPortalApp.pages.urls")),
]
