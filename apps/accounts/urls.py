from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("subscription-plans/", views.subscription_plan_list, name="subscription_plan_list"),
    path("subscription/", views.subscription_status, name="subscription_status"),
]
