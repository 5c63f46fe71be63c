from django.urls import path
from .views import label_list_create, label_detail

urlpatterns = [
    path('labels/', label_list_create, name='label-list-create'),
    path('labels/<int:pk>/', label_detail, name='label-detail'),
]
