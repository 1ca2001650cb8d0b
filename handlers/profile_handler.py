"""
handlers/profile_handler.py
----------------------------
"Update information" for every role.
Managers may also edit other accounts, including their type.
"""

from models.user import User, UserType
from services.profile_service import ProfileService
from utils.console import print_menu, read_choice, read_line

profile_service = ProfileService()

_OWN_FIELDS = {
    1: ("Password", "password", "New Password: "),
    2: ("Favorite Items", "fav_items", "New Favorite Items: "),
    3: ("Phone Number", "phone_num", "New Phone Number: "),
}
_MANAGER_FIELDS = {
    **_OWN_FIELDS,
    4: ("User type", "type", f"New type ({', '.join(UserType.ALL)}): "),
}


def update_profile(user: User) -> None:
    if user.is_manager():
        _manager_update(user)
    else:
        _edit_loop(_OWN_FIELDS, lambda field, value: profile_service.update_own(user, field, value))


def _manager_update(manager: User) -> None:
    while True:
        print_menu("What would you like to modify?", [(1, "My profile"), (2, "Users Profile"), (9, "Exit Modify Menu")])
        choice = read_choice()
        if choice == 1:
            _edit_loop(_OWN_FIELDS, lambda field, value: profile_service.update_own(manager, field, value))
        elif choice == 2:
            target = profile_service.find_user(read_line("User login: "))
            if target is None:
                print("Invalid Profile")
                continue
            print(f"Editing {target}")
            _edit_loop(
                _MANAGER_FIELDS,
                lambda field, value: profile_service.update_other(manager, target.login, field, value),
            )
        elif choice == 9:
            return
        else:
            print("Unrecognized choice!")


def _edit_loop(fields: dict, apply) -> None:
    """Prompt for fields to change until the user picks 9."""
    while True:
        print_menu("What would you like to modify?",
                   [(n, label) for n, (label, _, _) in fields.items()] + [(9, "Exit Modify Menu")])
        choice = read_choice()
        if choice == 9:
            return
        if choice not in fields:
            print("Unrecognized choice!")
            continue
        _, field, prompt = fields[choice]
        try:
            print(apply(field, read_line(prompt)))
        except ValueError as e:
            print(f"Error: {e}")
