from django.urls import path
from . import views

app_name = 'tax'

urlpatterns = [
    path('tax-rates/', views.tax_rate_list, name='tax_rate_list'),
    path('tax-rates/<str:country_code>/', views.tax_rates_by_country, name='tax_rates_by_country'),
    path('tax/calculate/', views.calculate, name='calculate'),
]
