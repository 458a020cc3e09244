from __future__ import annotations

import unittest


class TestPublicApiLockContract(unittest.TestCase):
    def test_api_module_exports_are_present(self) -> None:
        import tasky.api as api

        self.assertTrue(hasattr(api, "__all__"))
        self.assertIsInstance(api.__all__, (list, tuple))
        self.assertGreaterEqual(len(api.__all__), 3)

        for name in api.__all__:
            self.assertIsInstance(name, str)
            self.assertTrue(hasattr(api, name), f"tasky.api missing public name: {name}")
            obj = getattr(api, name)
            self.assertIsNotNone(obj, f"tasky.api {name} is None")

    def test_every_declared_export_is_defined(self) -> None:
        import tasky.api as api

        self.assertEqual(list(api._PUBLIC_EXPORTS), list(api.__all__))

    def test_public_exports_are_sorted_and_unique(self) -> None:
        import tasky.api as api

        self.assertIsInstance(api._PUBLIC_EXPORTS, tuple)
        self.assertEqual(len(set(api._PUBLIC_EXPORTS)), len(api._PUBLIC_EXPORTS))
        self.assertEqual(list(api._PUBLIC_EXPORTS), sorted(api._PUBLIC_EXPORTS))

    def test_package_reexports_match_api_all(self) -> None:
        import tasky
        import tasky.api as api

        self.assertEqual(tasky.__all__, api.__all__)
        for name in api.__all__:
            self.assertTrue(hasattr(tasky, name), f"tasky package does not re-export: {name}")
            self.assertIs(getattr(tasky, name), getattr(api, name), f"tasky.{name} must be same object as tasky.api.{name}")


if __name__ == "__main__":
    unittest.main(verbosity=2)
