from django.urls import path, include

urlpatterns = [
    path('api/gix/', include('history_app.urls', namespace='history_app')),
]
