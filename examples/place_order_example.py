from degiro_client import Actions, DegiroClient, OrderTypes, TimeTypes

if __name__ == "__main__":
    client = DegiroClient()
    client.login()

    placed = client.set_order(
        buy_sell=Actions.BUY,
        order_type=OrderTypes.LIMITED,
        product_id="331868",
        size=1,
        time_type=TimeTypes.DAY,
        price=100.0,
    )
    print(placed)

    # Cancel it again
    print(client.delete_order(placed["order_id"]))
