"""Tests for capability classification (capabilities.py, markers.py)."""

import pytest

from autoconfig.capabilities import (
    BOOTSTRAP_ORDER,
    CAPABILITIES,
    RUN_ORDER,
    CapabilityCategory,
    MarkerKind,
    Phase,
    categories_of,
    classify,
    filter_concrete,
)
from autoconfig.catalog import Catalog, ClassDescriptor, build_catalog
from autoconfig.markers import Managed, annotation_value, annotations_of, path, provider


@pytest.fixture(scope="module")
def shop_catalog():
    return build_catalog(["shop"])


def _names(descriptors):
    return {d.qualified_name for d in descriptors}


class TestCapabilityTable:
    """Tests for the fixed capability table."""

    def test_seven_categories(self):
        """Test that every category has a descriptor."""
        assert set(CAPABILITIES) == set(CapabilityCategory)
        assert len(CAPABILITIES) == 7

    def test_only_bundles_in_bootstrap(self):
        """Test phase assignment."""
        for category, capability in CAPABILITIES.items():
            expected = Phase.BOOTSTRAP if category is CapabilityCategory.BUNDLE else Phase.RUN
            assert capability.phase is expected

    def test_phase_orders_cover_all_categories(self):
        """Test that bootstrap and run orders partition the categories."""
        assert BOOTSTRAP_ORDER == (CapabilityCategory.BUNDLE,)
        assert RUN_ORDER == (
            CapabilityCategory.HEALTH_CHECK,
            CapabilityCategory.PROVIDER,
            CapabilityCategory.INJECTABLE_PROVIDER,
            CapabilityCategory.RESOURCE,
            CapabilityCategory.TASK,
            CapabilityCategory.MANAGED,
        )

    def test_annotation_categories(self):
        """Test which categories match by annotation."""
        by_annotation = {c for c, d in CAPABILITIES.items() if d.kind is MarkerKind.ANNOTATION}
        assert by_annotation == {CapabilityCategory.PROVIDER, CapabilityCategory.RESOURCE}

    def test_class_registered_categories(self):
        """Test which categories hand the class itself to the host."""
        as_class = {c for c, d in CAPABILITIES.items() if not d.registers_instance}
        assert as_class == {
            CapabilityCategory.PROVIDER,
            CapabilityCategory.INJECTABLE_PROVIDER,
            CapabilityCategory.RESOURCE,
        }

    def test_log_labels(self):
        labels = {c: d.label for c, d in CAPABILITIES.items()}
        assert labels == {
            CapabilityCategory.BUNDLE: "bundle class",
            CapabilityCategory.HEALTH_CHECK: "injectableHealthCheck",
            CapabilityCategory.PROVIDER: "provider class",
            CapabilityCategory.INJECTABLE_PROVIDER: "injectableProvider",
            CapabilityCategory.RESOURCE: "resource class",
            CapabilityCategory.TASK: "task",
            CapabilityCategory.MANAGED: "managed",
        }


class TestClassify:
    """Tests for classify() against the shop namespace."""

    def test_bundles(self, shop_catalog):
        assert _names(classify(shop_catalog, CapabilityCategory.BUNDLE)) == {"shop.bundles.AssetsBundle"}

    def test_health_checks_include_abstract_base(self, shop_catalog):
        """Test that classify alone does not drop abstract classes."""
        assert _names(classify(shop_catalog, CapabilityCategory.HEALTH_CHECK)) == {
            "shop.health.BaseHealthCheck",
            "shop.health.DatabaseHealthCheck",
        }

    def test_providers_by_annotation(self, shop_catalog):
        """Test that the provider marker is matched, including inherited."""
        assert _names(classify(shop_catalog, CapabilityCategory.PROVIDER)) == {
            "shop.providers.JsonProvider",
            "shop.providers.BaseMapper",
            "shop.providers.ErrorMapper",
        }

    def test_injectable_providers(self, shop_catalog):
        assert _names(classify(shop_catalog, CapabilityCategory.INJECTABLE_PROVIDER)) == {
            "shop.providers.ContextInjectableProvider",
        }

    def test_resources(self, shop_catalog):
        assert _names(classify(shop_catalog, CapabilityCategory.RESOURCE)) == {
            "shop.resources.OrderResource",
            "shop.resources.CartResource",
        }

    def test_tasks(self, shop_catalog):
        assert _names(classify(shop_catalog, CapabilityCategory.TASK)) == {
            "shop.tasks.FlushCacheTask",
            "shop.tasks.CacheWarmer",
            "shop.admin.tasks.ReindexTask",
            "shop.jobs.Jobs.NightlyReportTask",
        }

    def test_managed(self, shop_catalog):
        assert _names(classify(shop_catalog, CapabilityCategory.MANAGED)) == {
            "shop.managed.Scheduler",
            "shop.resources.CartResource",
            "shop.tasks.CacheWarmer",
        }

    def test_plain_class_matches_nothing(self, shop_catalog):
        helper = shop_catalog.get("shop.util.Helper")
        assert categories_of(helper) == ()

    def test_class_in_several_categories(self, shop_catalog):
        """Test that categories are independent predicates."""
        cart = shop_catalog.get("shop.resources.CartResource")
        assert categories_of(cart) == (CapabilityCategory.RESOURCE, CapabilityCategory.MANAGED)

    def test_accepts_category_value(self, shop_catalog):
        """Test that a plain string value works as a category."""
        assert classify(shop_catalog, "bundle") == classify(shop_catalog, CapabilityCategory.BUNDLE)


class TestFilterConcrete:
    """Tests for filter_concrete()."""

    def test_drops_abstract(self, shop_catalog):
        checks = filter_concrete(classify(shop_catalog, CapabilityCategory.HEALTH_CHECK))
        assert _names(checks) == {"shop.health.DatabaseHealthCheck"}

    def test_drops_explicitly_abstract_provider(self, shop_catalog):
        providers = filter_concrete(classify(shop_catalog, CapabilityCategory.PROVIDER))
        assert "shop.providers.BaseMapper" not in _names(providers)
        assert "shop.providers.ErrorMapper" in _names(providers)

    def test_n_concrete_m_abstract(self):
        """Test that N concrete and M abstract classes leave exactly N."""
        class Base(Managed):
            pass

        concrete = [
            type(f"Impl{i}", (Base,), {"start": lambda self: None, "stop": lambda self: None})
            for i in range(3)
        ]
        abstract = [type(f"Abstract{i}", (Base,), {}) for i in range(2)]
        catalog = Catalog.from_classes([Base] + concrete + abstract, ["synthetic"])

        matched = classify(catalog, CapabilityCategory.MANAGED)
        assert len(matched) == 6
        assert {d.cls for d in filter_concrete(matched)} == set(concrete)


class TestMarkers:
    """Tests for marker decorators."""

    def test_path_value(self):
        @path("/widgets")
        class WidgetResource:
            pass

        assert annotation_value(WidgetResource, "path") == "/widgets"

    def test_subclass_overrides_path(self):
        @path("/base")
        class Base:
            pass

        @path("/child")
        class Child(Base):
            pass

        assert annotation_value(Child, "path") == "/child"
        assert annotation_value(Base, "path") == "/base"

    def test_decorating_subclass_does_not_touch_base(self):
        class Base:
            pass

        @provider
        class Child(Base):
            pass

        assert annotations_of(Base) == {}
        assert annotations_of(Child) == {"provider": True}

    def test_stacked_markers(self):
        @provider
        @path("/both")
        class Both:
            pass

        descriptor = ClassDescriptor.of(Both)
        assert descriptor.annotations == frozenset({"provider", "path"})
