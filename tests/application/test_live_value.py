"""Unit tests for the last-value broadcast."""

from storefront.application.live_value import LiveValue


class TestLiveValue:

    def test_subscribe_replays_current_value(self):
        live = LiveValue(1)
        live.set(2)
        seen = []
        live.subscribe(seen.append)
        assert seen == [2]

    def test_observers_notified_in_subscription_order(self):
        live = LiveValue("a")
        order = []
        live.subscribe(lambda v: order.append(("first", v)))
        live.subscribe(lambda v: order.append(("second", v)))
        live.set("b")
        assert order[-2:] == [("first", "b"), ("second", "b")]
        assert live.value == "b"

    def test_unsubscribe_stops_delivery(self):
        live = LiveValue(0)
        seen = []
        subscription = live.subscribe(seen.append)
        live.set(1)
        subscription.unsubscribe()
        subscription.unsubscribe()
        live.set(2)
        assert seen == [0, 1]
        assert subscription.active is False

    def test_observer_may_unsubscribe_during_delivery(self):
        live = LiveValue(0)
        seen = []
        subscriptions = []

        def once(value):
            seen.append(value)
            if value and subscriptions:
                subscriptions[0].unsubscribe()

        subscriptions.append(live.subscribe(once))
        live.set(1)
        live.set(2)
        assert seen == [0, 1]
