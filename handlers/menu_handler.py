"""
handlers/menu_handler.py
-------------------------
Menu browsing for everyone and menu maintenance for managers.
Delegates all logic to MenuService.
"""

from models.menu_item import MENU_HEADERS
from models.user import User, UserType
from security.auth import requires_role
from services.menu_service import MenuService
from utils.console import print_menu, print_table, read_choice, read_float, read_line

menu_service = MenuService()

_MODIFY_FIELDS = {
    1: ("Item Name", "name"),
    2: ("Item Type", "type"),
    3: ("Item Price", "price"),
    4: ("Item Description", "description"),
    5: ("Item Image URL", "image_url"),
}


def view_menu(user: User) -> None:
    print("Menu:")
    print_table([item.as_row() for item in menu_service.get_menu()], MENU_HEADERS)


def search_item_name(user: User) -> None:
    name = read_line("What item do you want to search for? ")
    item = menu_service.search_by_name(name)
    if item:
        print_table([item.as_row()], MENU_HEADERS)
        print("Item found!")
    else:
        print("Item Not Found")


def search_item_category(user: User) -> None:
    category = read_line("What item category do you want to search for? ")
    items = menu_service.search_by_category(category)
    if items:
        print_table([item.as_row() for item in items], MENU_HEADERS)
        print("Item found!")
    else:
        print("Item Not Found")


@requires_role(UserType.MANAGER)
def modify_menu(user: User) -> None:
    """Add, delete and edit menu items until the manager exits."""
    while True:
        print_menu("MODIFY MENU", [(1, "Add Item"), (2, "Delete Item"), (3, "Modify Item"), (9, "Exit Modify Menu")])
        choice = read_choice()
        if choice == 1:
            _add_item()
        elif choice == 2:
            name = read_line("What item do you want to delete? ")
            print(menu_service.delete_item(name))
        elif choice == 3:
            _modify_item()
        elif choice == 9:
            return
        else:
            print("Unrecognized choice!")


def _add_item() -> None:
    name = read_line("New Item: ")
    item_type = read_line("Type: ")
    price = read_float("Price: ")
    description = read_line("Description: ")
    image_url = read_line("imageURL: ")
    print(menu_service.add_item(name, item_type, price, description, image_url))


def _modify_item() -> None:
    name = read_line("Which item do you want to modify? ")
    item = menu_service.search_by_name(name)
    if item is None:
        print("Item is not in the menu.")
        return
    print_table([item.as_row()], MENU_HEADERS)

    print_menu("What would you like to modify?",
               [(n, label) for n, (label, _) in _MODIFY_FIELDS.items()] + [(9, "Exit Modify Menu")])
    choice = read_choice()
    if choice == 9:
        return
    if choice not in _MODIFY_FIELDS:
        print("Error! Not an option to modify")
        return
    value = read_line("What would you like to modify it to? ")
    print(menu_service.modify_item(item.item_name, _MODIFY_FIELDS[choice][1], value))
