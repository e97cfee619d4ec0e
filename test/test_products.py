from degiro_client.endpoints.products import ProductsAPI
from degiro_client.constants import ProductTypes, Sort
from degiro_client.exceptions import DataShapeError
from unittest.mock import patch
import pytest


@patch.object(ProductsAPI, "make_request", return_value={"products": []})
def test_search_product_defaults(mock_make, session_manager):
    ProductsAPI(session_manager).search_product(text="Netflix")

    call = mock_make.call_args.kwargs
    assert call["url"] == (
        "https://trader.degiro.nl/product_search/secure/v5/products/lookup"
    )
    assert call["params"] == {
        "intAccount": 1234567,
        "sessionId": "SID123",
        "searchText": "Netflix",
        "limit": 7,
        "offset": 0,
    }


@patch.object(ProductsAPI, "make_request", return_value={"products": []})
def test_search_product_with_filters(mock_make, session_manager):
    ProductsAPI(session_manager).search_product(
        text="NFLX",
        product_type=ProductTypes.SHARES,
        sort_column="name",
        sort_type=Sort.DESC,
        limit=20,
        offset=40,
    )

    params = mock_make.call_args.kwargs["params"]
    assert params["productTypeId"] == 1
    assert params["sortColumns"] == "name"
    assert params["sortTypes"] == "desc"
    assert params["limit"] == 20
    assert params["offset"] == 40


@patch.object(ProductsAPI, "make_request", return_value={"data": {}})
def test_get_products_by_ids_wraps_scalar(mock_make, session_manager):
    ProductsAPI(session_manager).get_products_by_ids(331868)

    call = mock_make.call_args.kwargs
    assert call["method"] == "POST"
    assert call["url"].endswith("/v5/products/info")
    assert call["json_body"] == ["331868"]
    assert call["params"]["intAccount"] == 1234567


@patch.object(ProductsAPI, "make_request", return_value={"data": {}})
def test_get_products_by_ids_list(mock_make, session_manager):
    ProductsAPI(session_manager).get_products_by_ids(["1", 2, "3"])
    assert mock_make.call_args.kwargs["json_body"] == ["1", "2", "3"]


@patch.object(ProductsAPI, "make_request", return_value={"offset": 0})
def test_search_product_without_hits(mock_make, session_manager):
    result = ProductsAPI(session_manager).search_product(text="zzzz")
    assert result == {"offset": 0, "products": []}


@pytest.mark.parametrize("payload", [
    {"products": {"a": 1}},
    [],
    None,
])
def test_search_product_bad_shape(payload, session_manager):
    with patch.object(ProductsAPI, "make_request", return_value=payload):
        with pytest.raises(DataShapeError) as exc:
            ProductsAPI(session_manager).search_product(text="ASML")
    assert exc.value.payload == payload


@pytest.mark.parametrize("payload", [
    {"nope": 1},
    {"data": []},
    [],
])
def test_get_products_by_ids_bad_shape(payload, session_manager):
    with patch.object(ProductsAPI, "make_request", return_value=payload):
        with pytest.raises(DataShapeError) as exc:
            ProductsAPI(session_manager).get_products_by_ids(["1"])
    assert exc.value.payload == payload
