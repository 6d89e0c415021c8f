"""Main API URL router for /api/v1/."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from api.v1 import views as v1_views
from api.v1 import account_views as account_api_views
from api.v1 import quotation_views as quotation_api_views
from api.auth_views import LoginView, MeView, RefreshView

router = DefaultRouter()
router.register(r'users', v1_views.UserViewSet, basename='user')
router.register(r'teams', v1_views.TeamViewSet, basename='team')
router.register(r'departments', v1_views.DepartmentViewSet, basename='department')
router.register(r'zones', v1_views.ZoneViewSet, basename='zone')
router.register(r'accounts', account_api_views.BusinessAccountViewSet, basename='account')
router.register(r'quotations', quotation_api_views.QuotationViewSet, basename='quotation')


app_name = 'api'
urlpatterns = [
    path('', include(router.urls)),

    # Auth endpoints
    path('auth/token/', LoginView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', RefreshView.as_view(), name='token_refresh'),
    path('auth/me/', MeView.as_view(), name='auth-me'),
]
