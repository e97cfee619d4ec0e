from degiro_client import DegiroClient
from degiro_client.toolbox import portfolio_to_dataframe
import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

if __name__ == "__main__":
    # Credentials come from DEGIRO_USER / DEGIRO_PASS (or a .env file).
    client = DegiroClient()
    client.login()

    cash = client.get_cash_funds()
    portfolio = client.get_portfolio()

    print(cash["cashFunds"])
    print(portfolio_to_dataframe(portfolio["portfolio"]))

    orders = client.get_orders()
    print(orders["openOrders"])
