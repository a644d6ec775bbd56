from unittest.mock import MagicMock

from modules.auth.subscription import AuthStateSubscription


class TestAuthStateSubscription:
    def test_starts_active(self):
        subscription = AuthStateSubscription(MagicMock(id="sub-1"))
        assert subscription.active
        assert subscription.id == "sub-1"

    def test_unsubscribe_is_idempotent(self):
        """A second unsubscribe should not reach the client again."""
        inner = MagicMock()
        subscription = AuthStateSubscription(inner)

        subscription.unsubscribe()
        subscription.unsubscribe()

        inner.unsubscribe.assert_called_once()
        assert not subscription.active

    def test_release_callback_runs_once(self):
        on_release = MagicMock()
        subscription = AuthStateSubscription(MagicMock(), on_release=on_release)

        subscription.unsubscribe()
        subscription.unsubscribe()

        on_release.assert_called_once_with(subscription)

    def test_context_manager_unsubscribes(self):
        inner = MagicMock()

        with AuthStateSubscription(inner) as subscription:
            assert subscription.active

        assert not subscription.active
        inner.unsubscribe.assert_called_once()
