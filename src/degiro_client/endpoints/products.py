from typing import Dict, Iterable, Optional, Union

from ..base_client import BaseAPIClient, expect_section
from ..constants import ProductTypes, Sort


class ProductsAPI(BaseAPIClient):
    """Product lookup endpoints."""

    def search_product(
        self,
        *,
        text: str,
        product_type: Optional[int] = ProductTypes.ALL,
        sort_column: Optional[str] = None,
        sort_type: Optional[Sort] = None,
        limit: int = 7,
        offset: int = 0,
    ) -> Dict:
        """
        Search products by name, symbol or ISIN.

        Parameters
        ----------
        text : str
            Search term, e.g. "Netflix" or "NFLX".
        product_type : int, optional
            One of `ProductTypes`. ``None`` searches every type.
        sort_column : str, optional
            Column to sort by, e.g. "name".
        sort_type : Sort, optional
            Sort direction.
        limit : int
            Maximum number of results.
        offset : int
            Results offset.

        Returns
        -------
        dict
            Raw vendor JSON, products under ``products``. A search with
            no hits comes back without that key; it is set to ``[]``.

        Raises
        ------
        DataShapeError
            If the response is not an object or ``products`` is not a
            list.
        """
        if isinstance(sort_type, Sort):
            sort_type = sort_type.value

        params = {
            **self.account_params(),
            "searchText": text,
            "productTypeId": product_type,
            "sortColumns": sort_column,
            "sortTypes": sort_type,
            "limit": limit,
            "offset": offset,
        }
        params = {k: v for k, v in params.items() if v is not None}

        payload = self.make_request(
            url=f"{self.url('product_search_url')}v5/products/lookup",
            params=params,
            operation="searchProduct",
        )

        if isinstance(payload, dict):
            payload.setdefault("products", [])
        expect_section(payload, "products", list)
        return payload

    def get_products_by_ids(
        self,
        ids: Union[str, int, Iterable[Union[str, int]]]
    ) -> Dict:
        """
        Retrieve product details for one or more product ids.

        Returns
        -------
        dict
            Raw vendor JSON, keyed by product id under ``data``.

        Raises
        ------
        DataShapeError
            If ``data`` is missing or not an object.
        """
        if isinstance(ids, (str, int)):
            ids = [ids]

        payload = self.make_request(
            url=f"{self.url('product_search_url')}v5/products/info",
            method="POST",
            headers={"Content-Type": "application/json"},
            params=self.account_params(),
            json_body=[str(i) for i in ids],
            operation="getProductsByIds",
        )
        expect_section(payload, "data", dict)
        return payload
