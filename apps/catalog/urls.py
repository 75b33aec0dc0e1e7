from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    path('materials/master/', views.master_item_list, name='master_item_list'),
    path('materials/master/<int:pk>/', views.master_item_detail, name='master_item_detail'),
    path('materials/company/', views.company_item_list, name='company_item_list'),
    path('materials/company/<int:pk>/', views.company_item_detail, name='company_item_detail'),
    path('terms/master/', views.master_term_list, name='master_term_list'),
    path('terms/master/<int:pk>/', views.master_term_detail, name='master_term_detail'),
    path('terms/company/', views.company_term_list, name='company_term_list'),
    path('terms/company/<int:pk>/', views.company_term_detail, name='company_term_detail'),
    path('quotations/<int:quotation_pk>/terms/', views.quotation_term_list, name='quotation_term_list'),
    path('quotations/<int:quotation_pk>/terms/<int:pk>/', views.quotation_term_detail, name='quotation_term_detail'),
]
