# tests/test_catalog.py
import json

import httpx
import pytest

from carfinder import config
from carfinder.reco import client as client_mod
from carfinder.reco.catalog import LocalCatalog
from carfinder.reco.client import CatalogError, HttpCatalog, build_catalog
from carfinder.schemas import FilterCriteria, SortKey


# ------------------------------------------------------------------
# LocalCatalog
# ------------------------------------------------------------------
def test_bundled_catalog_loads():
    catalog = LocalCatalog(config.CATALOG_PATH)
    assert len(catalog) > 20
    page = catalog.page(FilterCriteria(brand="honda", color="red"))
    assert page.total > 0
    assert all(c.brand == "Honda" for c in page.results)


def test_filters_are_case_insensitive_contains(local_catalog):
    page = local_catalog.page(FilterCriteria(brand="HONDA", model="ama", limit=10))
    assert {c.model for c in page.results} == {"Amaze"}
    assert page.total == 2


def test_price_bounds_and_excluded_brand(local_catalog):
    page = local_catalog.page(FilterCriteria(min_price=630000, max_price=1170000,
                                             exclude_brand="toyota", limit=10))
    assert page.total == 6
    assert all(c.brand != "Toyota" for c in page.results)
    assert all(630000 <= c.price <= 1170000 for c in page.results)


def test_search_any_field(local_catalog):
    page = local_catalog.page(FilterCriteria(search="electric"))
    assert [c.model for c in page.results] == ["Nexon"]


def test_sort_is_stable_and_paginates(local_catalog):
    first = local_catalog.page(FilterCriteria(sort_by=SortKey.PRICE_ASC, limit=3))
    assert [c.price for c in first.results] == [540000, 620000, 690000]
    second = local_catalog.page(FilterCriteria(sort_by=SortKey.PRICE_ASC, limit=3, page=2))
    assert [c.price for c in second.results] == [720000, 780000, 800000]
    newest = local_catalog.page(FilterCriteria(sort_by=SortKey.YEAR_DESC, limit=1))
    assert newest.results[0].model == "Elevate"


def test_equal_keys_keep_catalog_order(local_catalog):
    page = local_catalog.page(FilterCriteria(sort_by=SortKey.YEAR_DESC, limit=10))
    years_2022 = [c.model for c in page.results if c.year == 2022]
    assert years_2022 == ["Glanza", "Amaze", "Creta", "Nexon"]


def test_semicolon_csv_with_synonyms(tmp_path):
    path = tmp_path / "cars.csv"
    path.write_text("Make;Model;Year;Price;Colour;Fuel;Seating\nKia;Sonet;2022;880000;White;Diesel;5\n")
    catalog = LocalCatalog(str(path))
    car = catalog.get(0)
    assert (car.brand, car.model, car.price, car.color, car.fuel_type, car.seats) == \
        ("Kia", "Sonet", 880000, "White", "Diesel", 5)
    assert car.transmission == ""


def test_json_inventory(tmp_path):
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps([
        {"brand": "Tata", "model": "Punch", "year": 2023, "price": 650000, "color": "Orange",
         "fuelType": "Petrol", "transmission": "Manual", "seats": 5},
        {"brand": "Tata", "model": "Tiago", "year": 2020, "price": "n/a", "color": "Red",
         "fuelType": "Petrol", "transmission": "Manual", "seats": 5},
    ]))
    catalog = LocalCatalog(str(path))
    # rows without a usable price are dropped
    assert len(catalog) == 1
    assert catalog.get(0).fuel_type == "Petrol"
    assert catalog.get(5) is None


def test_missing_columns_and_file(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("brand,model\nKia,Sonet\n")
    with pytest.raises(CatalogError):
        LocalCatalog(str(path))
    with pytest.raises(CatalogError):
        LocalCatalog(str(tmp_path / "missing.csv"))


def test_build_catalog_picks_implementation(monkeypatch):
    monkeypatch.setattr(config, "CATALOG_URL", "http://inventory.local/api/inventory")
    assert isinstance(build_catalog(), HttpCatalog)
    monkeypatch.setattr(config, "CATALOG_URL", "")
    assert isinstance(build_catalog(), LocalCatalog)


# ------------------------------------------------------------------
# HttpCatalog
# ------------------------------------------------------------------
PAYLOAD = {
    "total": 1, "page": 1, "limit": 5,
    "results": [{"brand": "Honda", "model": "City", "year": 2021, "price": 1150000,
                 "color": "Red", "fuelType": "Petrol", "transmission": "Manual", "seats": 5}],
}


def _catalog(handler):
    return HttpCatalog("http://inventory.local/api/inventory/", transport=httpx.MockTransport(handler))


def test_http_routes_and_wire_params(run):
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json=PAYLOAD)

    catalog = _catalog(handler)
    page = run(catalog.query(FilterCriteria(brand="Honda", min_price=630000, fuel_type="Petrol",
                                            exclude_brand="Toyota", sort_by=SortKey.PRICE_ASC)))
    assert page.results[0].fuel_type == "Petrol"

    url = seen[-1]
    assert url.path == "/api/inventory/filter"
    assert url.params["brand"] == "Honda"
    assert url.params["minPrice"] == "630000"
    assert url.params["fuelType"] == "Petrol"
    assert url.params["excludeBrand"] == "Toyota"
    assert url.params["sortBy"] == "price-asc"
    assert (url.params["page"], url.params["limit"]) == ("1", "5")

    run(catalog.query(FilterCriteria(search="family")))
    assert seen[-1].path == "/api/inventory/search"
    assert seen[-1].params["q"] == "family"

    run(catalog.query(FilterCriteria(page=2)))
    assert seen[-1].path == "/api/inventory"
    assert seen[-1].params["page"] == "2"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "Failed to load inventory data"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"total": "many", "results": "none"}),
    ],
)
def test_http_bad_answers_raise_catalog_error(run, response):
    catalog = _catalog(lambda request: response)
    with pytest.raises(CatalogError):
        run(catalog.query(FilterCriteria()))


def test_http_unreachable(run):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogError) as exc:
        run(_catalog(handler).query(FilterCriteria()))
    assert "unreachable" in str(exc.value)


def test_wire_params_drop_empty_fields():
    params = client_mod.wire_params(FilterCriteria(max_price=1000000.0))
    assert params == {"maxPrice": 1000000, "page": 1, "limit": 5}


def test_color_spellings_match(tmp_path):
    path = tmp_path / "cars.csv"
    path.write_text(
        "brand,model,year,price,color\n"
        "Kia,Seltos,2021,1300000,Grey\n"
        "Kia,Sonet,2022,880000,Gray Metallic\n"
        "Kia,Carens,2023,1100000,Golden\n"
    )
    catalog = LocalCatalog(str(path))
    assert catalog.page(FilterCriteria(color="grey")).total == 2
    assert catalog.page(FilterCriteria(color="gold")).total == 1


def test_bundled_catalog_gray_finds_grey():
    catalog = LocalCatalog(config.CATALOG_PATH)
    page = catalog.page(FilterCriteria(color="gray"))
    assert page.total == 4
    assert all(c.color == "Grey" for c in page.results)
