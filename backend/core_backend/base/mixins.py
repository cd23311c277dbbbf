from rest_framework.viewsets import ViewSetMixin
from django.db.models import Prefetch


class OptimizedQuerysetMixin(ViewSetMixin):
    """
    A ViewSet mixin that optimizes the queryset by reading the
    `select_related_fields` and `prefetch_related_fields` attributes declared
    in the Meta class of the serializer used for the current action.

    In list mode `list_select_related_fields` / `list_prefetch_related_fields`
    take over when declared, so list payloads skip relations they never render.
    """

    def _get_optimizations(self, serializer_class, view_mode=None):
        select_related = set()
        prefetch_related = []

        meta = getattr(serializer_class, "Meta", None)
        if meta is None:
            return select_related, prefetch_related

        select_fields = getattr(meta, "select_related_fields", [])
        prefetch_fields = getattr(meta, "prefetch_related_fields", [])
        if view_mode == "list":
            select_fields = getattr(meta, "list_select_related_fields", select_fields)
            prefetch_fields = getattr(meta, "list_prefetch_related_fields", prefetch_fields)

        for field in select_fields:
            select_related.add(field)

        for field in prefetch_fields:
            # Prefetch objects are not hashable in a useful way, keep order instead
            if isinstance(field, Prefetch) or field not in prefetch_related:
                prefetch_related.append(field)

        return select_related, prefetch_related

    def get_queryset(self):
        queryset = super().get_queryset()

        try:
            serializer_class = self.get_serializer_class()
        except (AttributeError, AssertionError):
            return queryset

        view_mode = self.get_view_mode() if hasattr(self, "get_view_mode") else None
        select_related, prefetch_related = self._get_optimizations(serializer_class, view_mode)

        if select_related:
            queryset = queryset.select_related(*select_related)

        if prefetch_related:
            queryset = queryset.prefetch_related(*prefetch_related)

        return queryset


class ViewModeContextMixin:
    """
    Passes a `view_mode` to serializers so FieldsetMixin can trim payloads.

    `list` actions get the 'list' fieldset, everything else 'detail'.
    Clients may override with ?view=list|detail.
    """

    def get_view_mode(self):
        request = getattr(self, 'request', None)
        requested = request.query_params.get('view') if request is not None else None
        if requested in ('list', 'detail'):
            return requested
        return 'list' if getattr(self, 'action', None) == 'list' else 'detail'

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['view_mode'] = self.get_view_mode()
        return context
