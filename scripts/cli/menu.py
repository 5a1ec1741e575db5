"""CLI menu: print main menu."""


def print_menu(database_url: str):
    """Print the main interactive menu."""
    W = 72
    print()
    print("=" * W)
    print("  PIZZERIA ORDERS".center(W))
    print("=" * W)
    print(f"  Store: {database_url}")
    print()
    print("  Orders:")
    print("    1   Place an order")
    print("    5   List recent orders")
    print()
    print("  Reports:")
    print("    2   Top ingredients (last month, top 5)")
    print("    3   Average price per category")
    print("    4   Best-selling category")
    print()
    print("  Store:")
    print("    S   Stock and courier roster")
    print()
    print("  Other:")
    print("    Q   Quit")
    print()
