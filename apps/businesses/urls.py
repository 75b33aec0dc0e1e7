from django.urls import path
from . import views

app_name = 'businesses'

urlpatterns = [
    path('company-profiles/', views.company_profile_list, name='company_profile_list'),
    path('company-profiles/<int:pk>/', views.company_profile_detail, name='company_profile_detail'),
    path('clients/', views.client_list, name='client_list'),
    path('clients/<int:pk>/', views.client_detail, name='client_detail'),
]
