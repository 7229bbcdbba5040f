"""
URL configuration for dashboard app.

Dashboard:
    GET /                     - Shell context and the active tab's gallery
    POST /sidebar/            - Collapse, expand, or toggle the sidebar
    GET /selection/           - Dialog state of a tab's screen
    POST /selection/          - Open or close a dialog
"""

from django.urls import path

from dashboard.views import DashboardView, SelectionView, SidebarView

app_name = "dashboard"

urlpatterns = [
    path("", DashboardView.as_view(), name="screen"),
    path("sidebar/", SidebarView.as_view(), name="sidebar"),
    path("selection/", SelectionView.as_view(), name="selection"),
]
