from degiro_client import DegiroClient, DegiroConfig, ProductTypes

if __name__ == "__main__":
    config = DegiroConfig.from_env(debug=True)
    client = DegiroClient(config)
    client.login()

    found = client.search_product(
        text="ASML",
        product_type=ProductTypes.SHARES,
        limit=1,
    )
    product = found["products"][0]

    print(client.get_ask_bid_price(product["vwdId"]))
