"""
Tests for URL -> page name routing.
"""
from pomgen.generators.page_router import PageRouter, capitalize_component, split_url


def test_new_page_named_from_domain_and_path():
    """www is elided; second label and first path segment are capitalised"""
    url_page_map = {}
    router = PageRouter(url_page_map)

    assert router.resolve("http://www.example.com/login") == "PageExampleLogin0"
    assert url_page_map == {"www.example.com/login": "PageExampleLogin0"}


def test_first_registered_pattern_wins():
    router = PageRouter({"example.com": "PageA", "example.com/login": "PageB"})
    assert router.resolve("http://www.example.com/login") == "PageA"


def test_page_index_is_run_wide():
    router = PageRouter({})
    assert router.resolve("https://shop.example.com/cart/items") == "PageShopExampleCart0"
    assert router.resolve("https://www.example.com/checkout") == "PageExampleCheckout1"


def test_overlong_components_are_dropped():
    router = PageRouter({})
    assert router.resolve("http://www.averyveryveryverylongdomainname.com/x") == "PageX0"


def test_component_limit_is_configurable():
    router = PageRouter({}, component_limit=5)
    assert router.resolve("http://www.example.com/login") == "PageLogin0"


def test_registered_pattern_keeps_port():
    """Later URLs below a minted page on the same origin resolve to it"""
    router = PageRouter({})
    first = router.resolve("http://localhost:8080/app")
    assert first == "PageLocalhostApp0"
    assert router.resolve("http://localhost:8080/app/settings") == first


def test_each_url_mints_at_most_once():
    created = []
    router = PageRouter({}, on_new_page=created.append)

    router.resolve("http://www.example.com/login")
    router.resolve("http://www.example.com/login")

    assert created == ["PageExampleLogin0"]
    assert router.page_index == 1


def test_helpers():
    assert capitalize_component("my-app") == "Myapp"
    assert capitalize_component("%%") == ""
    assert split_url("https://user@Host.Example.com:443/a/b") == ("Host.Example.com", "/a/b")
    assert split_url("www.example.com/login") == ("www.example.com", "/login")


def test_minted_name_skips_seeded_names():
    url_page_map = {"other.org/x": "PageExampleLogin0", "other.org/y": "PageExampleLogin1"}
    router = PageRouter(url_page_map)

    assert router.resolve("http://www.example.com/login") == "PageExampleLogin2"
    assert router.resolve("http://www.example.com/home") == "PageExampleHome3"
