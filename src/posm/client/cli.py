from __future__ import annotations

import argparse
import sys
from typing import Sequence

from posm.client.api import ApiError, MenuApiClient, api_base_from_env
from posm.client.store import MenuStore
from posm.client.views import (
    DELETE_MENU_CONFIRMATION,
    LandingPage,
    MenuDetailPage,
    MenuEditPage,
    MenuListPage,
    NewMenuPage,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="posm-admin", description="Manage POSM menus.")
    parser.add_argument("--api-base", default=None, help="API base URL (env POSM_API_BASE).")
    resources = parser.add_subparsers(dest="resource")

    menus = resources.add_parser("menus").add_subparsers(dest="command", required=True)
    menus.add_parser("list")
    show = menus.add_parser("show")
    show.add_argument("menu_id", type=int)
    create = menus.add_parser("create")
    create.add_argument("name")
    create.add_argument("--description", default="")
    remove = menus.add_parser("delete")
    remove.add_argument("menu_id", type=int)
    remove.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")

    items = resources.add_parser("items").add_subparsers(dest="command", required=True)
    add = items.add_parser("add")
    add.add_argument("menu_id", type=int)
    add.add_argument("name")
    add.add_argument("price", help="Price in dollars, e.g. 9.99")
    add.add_argument("--description", default="")
    edit = items.add_parser("edit")
    edit.add_argument("menu_id", type=int)
    edit.add_argument("item_id", type=int)
    edit.add_argument("--name")
    edit.add_argument("--description")
    edit.add_argument("--price")
    drop = items.add_parser("delete")
    drop.add_argument("menu_id", type=int)
    drop.add_argument("item_id", type=int)

    steps = resources.add_parser("steps").add_subparsers(dest="command", required=True)
    step = steps.add_parser("add")
    step.add_argument("recipe_id", type=int)
    step.add_argument("order", type=int)
    step.add_argument("instruction")

    return parser.parse_args(argv)


def _confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _run_menus(args: argparse.Namespace, store: MenuStore) -> tuple[str, bool]:
    if args.command == "list":
        page = MenuListPage(store)
        page.load()
        return page.render(), store.state.error is None

    if args.command == "show":
        detail = MenuDetailPage(store, args.menu_id)
        detail.load()
        return detail.render(), store.state.error is None

    if args.command == "create":
        new_menu = NewMenuPage(store)
        new_menu.name = args.name
        new_menu.description = args.description
        ok = new_menu.submit()
        return new_menu.render(), ok

    listing = MenuListPage(store)
    confirmed = args.yes or _confirm(DELETE_MENU_CONFIRMATION)
    if not confirmed:
        return "Cancelled.", True
    ok = listing.delete(args.menu_id, confirmed)
    if ok:
        listing.load()
    return listing.render(), ok


def _run_items(args: argparse.Namespace, store: MenuStore) -> tuple[str, bool]:
    page = MenuEditPage(store, args.menu_id)
    page.load()

    if args.command == "add":
        page.new_item.name = args.name
        page.new_item.description = args.description
        page.new_item.price = args.price
        ok = page.add_item()
    elif args.command == "edit":
        if not page.start_edit(args.item_id):
            return page.render() + f"\nItem {args.item_id} is not on this menu.", False
        if args.name is not None:
            page.form.name = args.name
        if args.description is not None:
            page.form.description = args.description
        if args.price is not None:
            page.form.price = args.price
        ok = page.submit_edit()
    else:
        ok = page.remove_item(args.item_id)
    return page.render(), ok


def _run_steps(args: argparse.Namespace, api: MenuApiClient) -> tuple[str, bool]:
    body = {"recipeId": args.recipe_id, "order": args.order, "instruction": args.instruction}
    try:
        created = api.create_step(body)
    except ApiError as exc:
        return f"Error: {exc}", False
    return f"Added step {created.order} to recipe {created.recipeId}.", True


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.resource is None:
        print(LandingPage().render())
        return 0

    with MenuApiClient(base_url=args.api_base or api_base_from_env()) as api:
        store = MenuStore(api)
        if args.resource == "menus":
            output, ok = _run_menus(args, store)
        elif args.resource == "items":
            output, ok = _run_items(args, store)
        else:
            output, ok = _run_steps(args, api)

    print(output)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
