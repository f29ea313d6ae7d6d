"""
Tests for Filter Executors Registry.

Tests cover:
- Registry creation and basic operations
- Executor registration and lookup by kind or name
- Metadata management
- Executor execution
- Filtering by tags
- Default registry singleton
"""

import unittest

from PIL import Image

from IF_Libs.FilterLib.filter_executors import (
    FilterExecutorRegistry,
    get_default_registry,
    register_default_executors,
)
from IF_Libs.FilterLib.filter_kinds import FilterKind


def identity_executor(image, parameters):
    return image


class TestFilterExecutorRegistry(unittest.TestCase):
    """Test FilterExecutorRegistry basic functionality."""

    def setUp(self):
        """Create a fresh registry for each test."""
        self.registry = FilterExecutorRegistry()

    def test_registry_creation(self):
        self.assertEqual(self.registry.list_filter_kinds(), [])

    def test_register_executor(self):
        self.registry.register(FilterKind.EDGES, identity_executor)

        self.assertTrue(self.registry.has_executor(FilterKind.EDGES))
        self.assertIn(FilterKind.EDGES, self.registry.list_filter_kinds())

    def test_register_by_name(self):
        """Filters can be registered by display name."""
        self.registry.register("Sepia Tone", identity_executor)

        self.assertTrue(self.registry.has_executor(FilterKind.SEPIA_TONE))
        self.assertTrue(self.registry.has_executor("SepiaTone"))

    def test_register_unknown_filter_raises_error(self):
        with self.assertRaises(KeyError):
            self.registry.register("Posterize", identity_executor)

    def test_register_non_callable_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register(FilterKind.EDGES, "not callable")

    def test_register_duplicate_raises_error(self):
        self.registry.register(FilterKind.EDGES, identity_executor)

        with self.assertRaises(RuntimeError):
            self.registry.register(FilterKind.EDGES, identity_executor)

    def test_get_missing_executor_raises_error(self):
        with self.assertRaises(KeyError):
            self.registry.get_executor(FilterKind.VIGNETTE)

    def test_has_executor_unknown_name(self):
        self.assertFalse(self.registry.has_executor("Posterize"))

    def test_unregister_executor(self):
        self.registry.register(FilterKind.PIXELLATE, identity_executor)

        self.assertTrue(self.registry.unregister(FilterKind.PIXELLATE))
        self.assertFalse(self.registry.has_executor(FilterKind.PIXELLATE))

    def test_unregister_missing_returns_false(self):
        self.assertFalse(self.registry.unregister(FilterKind.PIXELLATE))

    def test_list_in_declaration_order(self):
        self.registry.register(FilterKind.VIGNETTE, identity_executor)
        self.registry.register(FilterKind.CRYSTALLIZE, identity_executor)
        self.registry.register(FilterKind.EDGES, identity_executor)

        self.assertEqual(
            self.registry.list_filter_kinds(),
            [FilterKind.CRYSTALLIZE, FilterKind.EDGES, FilterKind.VIGNETTE],
        )
        self.assertEqual(self.registry.list_filter_names(), ["Crystallize", "Edges", "Vignette"])

    def test_clear(self):
        self.registry.register(FilterKind.EDGES, identity_executor)
        self.registry.clear()

        self.assertEqual(self.registry.list_filter_kinds(), [])


class TestFilterExecution(unittest.TestCase):
    """Test executing filters through the registry."""

    def setUp(self):
        self.registry = FilterExecutorRegistry()
        self.image = Image.new("RGB", (10, 10), "blue")

    def test_execute_passes_image_and_parameters(self):
        calls = []

        def recording_executor(image, parameters):
            calls.append((image, parameters))
            return image

        self.registry.register(FilterKind.GAUSSIAN_BLUR, recording_executor)
        result = self.registry.execute(FilterKind.GAUSSIAN_BLUR, self.image, {"radius": 100.0})

        self.assertIs(result, self.image)
        self.assertEqual(calls, [(self.image, {"radius": 100.0})])

    def test_execute_copies_parameters(self):
        """Executors cannot mutate the caller's mapping."""
        def mutating_executor(image, parameters):
            parameters["radius"] = 0
            return image

        self.registry.register(FilterKind.GAUSSIAN_BLUR, mutating_executor)
        parameters = {"radius": 5.0}
        self.registry.execute(FilterKind.GAUSSIAN_BLUR, self.image, parameters)

        self.assertEqual(parameters, {"radius": 5.0})

    def test_execute_returns_none_signal(self):
        self.registry.register(FilterKind.EDGES, lambda image, parameters: None)

        self.assertIsNone(self.registry.execute(FilterKind.EDGES, self.image, {}))

    def test_execute_missing_raises_error(self):
        with self.assertRaises(KeyError):
            self.registry.execute(FilterKind.EDGES, self.image, {})


class TestFilterMetadata(unittest.TestCase):
    """Test filter metadata management."""

    def setUp(self):
        self.registry = FilterExecutorRegistry()

    def test_get_metadata(self):
        self.registry.register(
            FilterKind.UNSHARP_MASK,
            identity_executor,
            description="Sharpen",
            tags=["sharpen", "detail"],
        )

        meta = self.registry.get_metadata(FilterKind.UNSHARP_MASK)

        self.assertEqual(meta["display_name"], "Unsharp Mask")
        self.assertEqual(meta["description"], "Sharpen")
        self.assertEqual(meta["parameters"], ["radius", "intensity"])
        self.assertEqual(set(meta["tags"]), {"sharpen", "detail"})

    def test_get_metadata_missing_raises_error(self):
        with self.assertRaises(KeyError):
            self.registry.get_metadata(FilterKind.EDGES)

    def test_filter_by_tag_case_insensitive(self):
        self.registry.register(FilterKind.GAUSSIAN_BLUR, identity_executor, tags=["BLUR"])
        self.registry.register(FilterKind.EDGES, identity_executor, tags=["stylize"])

        self.assertEqual(self.registry.filter_by_tag("blur"), [FilterKind.GAUSSIAN_BLUR])


class TestDefaultRegistry(unittest.TestCase):
    """Test the global default registry."""

    def test_singleton(self):
        self.assertIs(get_default_registry(), get_default_registry())

    def test_every_filter_registered(self):
        registry = get_default_registry()

        self.assertEqual(registry.list_filter_kinds(), list(FilterKind))

    def test_register_default_executors_on_fresh_registry(self):
        registry = FilterExecutorRegistry()
        register_default_executors(registry)

        self.assertEqual(len(registry.list_filter_kinds()), 7)
        self.assertIn(FilterKind.GAUSSIAN_BLUR, registry.filter_by_tag("blur"))

    def test_default_executors_render_images(self):
        registry = get_default_registry()
        image = Image.new("RGB", (16, 16), "green")

        for kind in FilterKind:
            with self.subTest(kind=kind):
                result = registry.execute(kind, image, {})
                self.assertEqual(result.size, image.size)


if __name__ == "__main__":
    unittest.main()
