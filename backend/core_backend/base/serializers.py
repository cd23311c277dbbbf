from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer that provides common functionality.

    Subclasses declare `select_related_fields` / `prefetch_related_fields`
    in Meta so OptimizedQuerysetMixin can shape the queryset.
    """

    class Meta:
        # Default optimization fields (can be overridden)
        select_related_fields = []
        prefetch_related_fields = []


class FieldsetMixin:
    """
    Mixin that enables view-mode field control via context.

    Usage:
        class TableSerializer(FieldsetMixin, BaseModelSerializer):
            class Meta:
                model = Table
                fields = '__all__'

                fieldsets = {
                    'list': ['id', 'number', 'capacity', 'status'],
                    'detail': '__all__',
                }

                # Fields that must always be included
                required_fields = {'id'}  # Default
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._apply_fieldset_filtering()

    def _apply_fieldset_filtering(self):
        """
        Apply fieldset based on view_mode from context.

        Required fields are always preserved even if a fieldset forgets them.
        """
        view_mode = self.context.get('view_mode')
        fieldsets = getattr(self.Meta, 'fieldsets', {})

        if not view_mode or view_mode not in fieldsets:
            return

        fieldset_value = fieldsets[view_mode]
        if fieldset_value == '__all__':
            return

        required_fields = getattr(self.Meta, 'required_fields', {'id'})
        allowed = set(fieldset_value) | set(required_fields)

        for field_name in set(self.fields.keys()) - allowed:
            self.fields.pop(field_name)

