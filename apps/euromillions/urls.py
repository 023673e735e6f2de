from django.urls import path

from . import views

urlpatterns = [
    path('', views.dashboard, name='dashboard'),
    path('budget/', views.budget, name='budget'),
    path('api/jackpot', views.api_jackpot, name='api_jackpot'),
    path('api/exchange-rate', views.api_exchange_rate, name='api_exchange_rate'),
    path('api/upload-data', views.api_upload_data, name='api_upload_data'),
    path('api/draws', views.api_draws, name='api_draws'),
    path('api/predictions/generate', views.api_generate_prediction, name='api_generate_prediction'),
    path('api/predictions/latest', views.api_latest_prediction, name='api_latest_prediction'),
    path('api/predictions', views.api_predictions, name='api_predictions'),
    path('api/model/performance', views.api_model_performance, name='api_model_performance'),
    path('api/analysis/frequency', views.api_frequency_analysis, name='api_frequency_analysis'),
    path('api/budget', views.api_budget, name='api_budget'),
]
