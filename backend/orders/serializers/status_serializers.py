from rest_framework import serializers

from orders.models import Order, OrderItem


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Staff-requested order status. Transition rules are enforced by
    OrderService, not here.
    """

    status = serializers.ChoiceField(choices=Order.Status.choices)


class UpdateOrderItemStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderItem.Status.choices)
