"""Serializers for dashboard shell requests."""

from rest_framework import serializers

from media.controller import Dialog


class DashboardQuerySerializer(serializers.Serializer):
    """
    Query parameters for the dashboard screen.

    tab is not validated against the tab list; unknown keys fall back to all.
    collection narrows the collections tab to one collection (or
    "uncategorized").
    """

    tab = serializers.CharField(required=False, default="all")
    collection = serializers.CharField(required=False, allow_null=True)


class SidebarSerializer(serializers.Serializer):
    """Omit collapsed (or send null) to toggle."""

    collapsed = serializers.BooleanField(required=False, allow_null=True, default=None)


class SelectionSerializer(serializers.Serializer):
    """
    Open or close a dialog on a tab's screen.

    Actions:
        preview          open the preview for media_id
        confirm_delete   ask for delete confirmation of media_id
        create_collection open the new collection dialog
        close            close any open dialog
    """

    ACTIONS = [
        Dialog.PREVIEW.value,
        Dialog.CONFIRM_DELETE.value,
        Dialog.CREATE_COLLECTION.value,
        "close",
    ]

    tab = serializers.CharField(required=False, default="all")
    action = serializers.ChoiceField(choices=ACTIONS)
    media_id = serializers.CharField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        if attrs["action"] in (Dialog.PREVIEW.value, Dialog.CONFIRM_DELETE.value):
            if not attrs.get("media_id"):
                raise serializers.ValidationError(
                    {"media_id": ["This field is required for this action."]}
                )
        return attrs
