from django.urls import path
from . import views

app_name = 'invoices'

urlpatterns = [
    path('invoices/', views.invoice_list, name='invoice_list'),
    path('invoices/<int:pk>/', views.invoice_detail, name='invoice_detail'),
    path('invoices/<int:pk>/items/', views.invoice_item_list, name='invoice_item_list'),
    path('invoices/<int:pk>/items/<int:item_pk>/', views.invoice_item_detail, name='invoice_item_detail'),
    path('invoices/<int:pk>/summary/', views.invoice_summary, name='invoice_summary'),
    path('quotations/', views.quotation_list, name='quotation_list'),
    path('quotations/<int:pk>/', views.quotation_detail, name='quotation_detail'),
    path('quotations/<int:pk>/items/', views.quotation_item_list, name='quotation_item_list'),
    path('quotations/<int:pk>/items/<int:item_pk>/', views.quotation_item_detail, name='quotation_item_detail'),
    path('quotations/<int:pk>/summary/', views.quotation_summary, name='quotation_summary'),
    path('quotations/<int:pk>/convert/', views.quotation_convert, name='quotation_convert'),
    path('invoice-templates/', views.invoice_template_list, name='invoice_template_list'),
]
