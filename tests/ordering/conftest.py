import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def catalog():
    """Menu catalog with a few priced dishes, installed as the active catalog."""
    from ordering.catalog import set_catalog
    from ordering.catalog.memory_adapter import InMemoryMenuCatalog

    menu = InMemoryMenuCatalog()
    menu.add("dish-a", 100.0, name="Paneer Tikka")
    menu.add("dish-b", 50.0, name="Masala Chai")
    menu.add("dish-c", 30.0, name="Gulab Jamun")
    set_catalog(menu)
    return menu


@pytest.fixture()
def profiles():
    from ordering.profiles import set_profiles
    from ordering.profiles.memory_adapter import InMemoryProfileDirectory

    directory = InMemoryProfileDirectory()
    set_profiles(directory)
    return directory
