"""
Basic Optional usage: construction, combinators and fallbacks.

Run: python examples/basic_optional.py
"""
from optionalpy import Optional, NoSuchElementError


USERS = {"ada": {"email": "ada@example.com"}, "bob": {"email": None}}


def find_user(name: str) -> Optional[dict]:
    return Optional.of_nullable(USERS.get(name))


def email_of(name: str) -> Optional[str]:
    return find_user(name).map(lambda u: u["email"]).flat_nullable()


def main():
    print("ada =>", email_of("ada").or_else("<none>"))      # ada@example.com
    print("bob =>", email_of("bob").or_else("<none>"))      # <none>
    print("eve =>", email_of("eve").or_else_get(lambda: "<unknown user>"))

    email_of("ada").filter(lambda e: e.endswith("@example.com")).if_present(
        lambda e: print("internal address:", e)
    )

    try:
        email_of("eve").get()
    except NoSuchElementError as ex:
        print("get() on empty =>", ex)


if __name__ == "__main__":
    main()
