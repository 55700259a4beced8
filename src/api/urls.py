"""Main API URL router for /api/v1/."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from api.v1 import views as v1_views

router = DefaultRouter()
router.register(r'deposits', v1_views.DepositViewSet, basename='deposit')
router.register(r'withdrawals', v1_views.WithdrawalScheduleViewSet, basename='withdrawal')
router.register(r'targets', v1_views.EmployeeTargetViewSet, basename='target')
router.register(r'commissions', v1_views.EmployeeCommissionViewSet, basename='commission')


app_name = 'api'
urlpatterns = [
    path('', include(router.urls)),

    # Auth endpoints
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Dashboard
    path('dashboard/stats/', v1_views.DashboardStatsView.as_view(), name='dashboard-stats'),
    path('dashboard/monthly-performance/', v1_views.MonthlyPerformanceView.as_view(), name='dashboard-monthly-performance'),
    path('dashboard/top-employees/', v1_views.TopEmployeesView.as_view(), name='dashboard-top-employees'),
    path('dashboard/recent-clients/', v1_views.RecentClientsView.as_view(), name='dashboard-recent-clients'),
    path('dashboard/upcoming-withdrawals/', v1_views.UpcomingWithdrawalsView.as_view(), name='dashboard-upcoming-withdrawals'),

    # Calendar
    path('calendar/', v1_views.CalendarView.as_view(), name='calendar'),

    # Employees
    path('employees/', v1_views.EmployeeCreateView.as_view(), name='employee-create'),
]
