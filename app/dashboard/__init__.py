"""
Dashboard shell app.

Routes the signed-in user between the gallery tabs, keeps the sidebar
state in the session, and opens or closes dialogs on each tab's screen.
"""
