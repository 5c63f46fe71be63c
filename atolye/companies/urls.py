from django.urls import path
from .views import (
    profile_detail, company_create, company_join, company_current, company_members
)

urlpatterns = [
    path('profile/', profile_detail, name='profile-detail'),
    path('companies/', company_create, name='company-create'),
    path('companies/join/', company_join, name='company-join'),
    path('companies/current/', company_current, name='company-current'),
    path('companies/current/members/', company_members, name='company-members'),
]
