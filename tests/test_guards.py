"""Unit tests for app.services.guards: guard slots and the clearing helpers."""

import unittest

from app.services.guards import (
    GuardName,
    GuardSessionStore,
    clear_all_guards,
    clear_all_guards_except,
)


class TestGuardSessionStore(unittest.TestCase):
    """Login/logout on individual guard slots."""

    def test_new_store_has_no_active_guard(self) -> None:
        store = GuardSessionStore()
        self.assertTrue(store.is_empty())
        self.assertFalse(store.check(GuardName.ADMIN))
        self.assertFalse(store.check(GuardName.STAFF))
        self.assertEqual(store.active_guards(), [])

    def test_login_sets_slot(self) -> None:
        store = GuardSessionStore()
        store.login(GuardName.STAFF, 7, remember=True)
        self.assertTrue(store.check(GuardName.STAFF))
        self.assertEqual(store.principal_id(GuardName.STAFF), 7)
        self.assertTrue(store.slot(GuardName.STAFF).remember)
        self.assertIsNone(store.principal_id(GuardName.ADMIN))

    def test_logout_on_empty_slot_is_noop(self) -> None:
        store = GuardSessionStore()
        store.logout(GuardName.ADMIN)
        self.assertTrue(store.is_empty())

    def test_active_guards_in_priority_order(self) -> None:
        store = GuardSessionStore()
        store.login(GuardName.STAFF, 2)
        store.login(GuardName.ADMIN, 1)
        self.assertEqual(store.active_guards(), [GuardName.ADMIN, GuardName.STAFF])


class TestClearAllGuards(unittest.TestCase):
    """clear_all_guards logs out everything and is idempotent."""

    def test_clears_every_active_guard(self) -> None:
        store = GuardSessionStore()
        store.login(GuardName.ADMIN, 1)
        store.login(GuardName.STAFF, 2)
        clear_all_guards(store)
        self.assertTrue(store.is_empty())

    def test_noop_on_empty_store(self) -> None:
        store = GuardSessionStore()
        clear_all_guards(store)
        self.assertTrue(store.is_empty())

    def test_twice_same_as_once(self) -> None:
        once = GuardSessionStore()
        once.login(GuardName.STAFF, 3)
        clear_all_guards(once)

        twice = GuardSessionStore()
        twice.login(GuardName.STAFF, 3)
        clear_all_guards(twice)
        clear_all_guards(twice)

        self.assertEqual(once.active_guards(), twice.active_guards())
        self.assertTrue(twice.is_empty())


class TestClearAllGuardsExcept(unittest.TestCase):
    """clear_all_guards_except keeps only the named guard."""

    def test_keeps_named_guard(self) -> None:
        store = GuardSessionStore()
        store.login(GuardName.ADMIN, 1)
        store.login(GuardName.STAFF, 2)
        clear_all_guards_except(store, GuardName.STAFF)
        self.assertEqual(store.active_guards(), [GuardName.STAFF])
        self.assertEqual(store.principal_id(GuardName.STAFF), 2)

    def test_kept_guard_may_be_inactive(self) -> None:
        store = GuardSessionStore()
        store.login(GuardName.ADMIN, 1)
        clear_all_guards_except(store, GuardName.STAFF)
        self.assertTrue(store.is_empty())

    def test_idempotent(self) -> None:
        store = GuardSessionStore()
        store.login(GuardName.ADMIN, 1)
        store.login(GuardName.STAFF, 2)
        clear_all_guards_except(store, GuardName.ADMIN)
        clear_all_guards_except(store, GuardName.ADMIN)
        self.assertEqual(store.active_guards(), [GuardName.ADMIN])


if __name__ == "__main__":
    unittest.main()
