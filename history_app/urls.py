from django.urls import path

from . import views

app_name = 'history_app'

urlpatterns = [
    path("", views.repo_overview, name="repo_overview"),
    path("commits/", views.commit_list, name="commit_list"),
    path("commit/<str:commit_sha>/", views.commit_detail, name="commit_detail"),
    path("tree/<str:commit_sha>/", views.tree_view, name="tree_view"),
    path("blob/<str:commit_sha>/<path:path>/", views.blob_view, name="blob_view"),
    path("status/", views.status_view, name="status_view"),
]
