"""Shopping lists and their items.

Item toggles and deletes are applied to the open list straight away and
rolled back if the server rejects them.
"""
from collections import defaultdict
from typing import Dict, List, Optional

from shared.enums import ShoppingCategory
from shared.schemas import (
    AddShoppingItemRequest, ShoppingItem, ShoppingList, ShoppingListDetailResponse, ShoppingListRequest,
    ShoppingListsResponse,
)
from shared.validation import ValidationError, Validator
from ..services import endpoints
from .base import ResourceViewModel


class ShoppingViewModel(ResourceViewModel):
    parse_error_message = "Failed to parse shopping list data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.stats = None
        self.new_item_name = ''
        self.new_item_quantity = 1
        self.new_item_category = ShoppingCategory.OTHER

    @property
    def lists(self) -> List[ShoppingList]:
        return self.items

    @property
    def selected_items(self) -> List[ShoppingItem]:
        if self.selected is None:
            return []
        return self.selected.items or []

    def _fetch_list(self):
        return self.api.request(endpoints.shopping_lists(), model=ShoppingListsResponse)

    def _apply_list(self, response: ShoppingListsResponse):
        self.items = response.lists or []
        self.stats = response.stats

    def load_lists(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load lists",
                             scope=scope, show_loading=not self.items)

    def refresh_lists(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def _fetch_detail(self, list_id):
        response = self.api.request(endpoints.shopping_list(list_id), model=ShoppingListDetailResponse)
        if response.list is None:
            raise LookupError("List not found")
        return _merge_items(response)

    def load_list(self, list_id, scope=None):
        def fallback(error):
            return str(error) if isinstance(error, LookupError) else "Failed to load list"

        return self.run_load(lambda: self._fetch_detail(list_id), self._apply_detail, fallback, scope=scope)

    def refresh_list(self, list_id, scope=None):
        """Reload the open list after an item change; failures keep what is shown."""
        return self.run_secondary(lambda: self._fetch_detail(list_id), self._apply_detail, scope=scope)

    def _apply_detail(self, shopping_list: ShoppingList):
        self.selected = shopping_list
        self.items = [shopping_list if s == shopping_list else s for s in self.items]

    def create_list(self, name, store_name=None, color=None, scope=None):
        try:
            body = ShoppingListRequest(name=Validator.validate_required(name, "List name").strip(),
                                       store_name=store_name, color=color)
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_shopping_list(), json=body)

        def apply(_):
            self.load_lists(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to create list", scope=scope,
                                 success_message="List created")

    def delete_list(self, list_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_shopping_list(list_id))

        def apply(_):
            self.items = [s for s in self.items if s.id != list_id]
            if self.selected is not None and self.selected.id == list_id:
                self.selected = None

        return self.run_mutation(fetch, apply, "Failed to delete list", scope=scope)

    # Items
    def add_item(self, list_id, scope=None):
        """Add the item typed into the quick-add row; the row resets before the request is sent."""
        name = self.new_item_name.strip()
        if not name:
            return self.fail_validation(ValidationError("Please enter an item name"))
        body = AddShoppingItemRequest(
            name=name,
            quantity=self.new_item_quantity if self.new_item_quantity > 1 else None,
            category=getattr(self.new_item_category, 'value', self.new_item_category),
        )
        self.new_item_name = ''
        self.new_item_quantity = 1

        def fetch():
            return self.api.request(endpoints.add_shopping_item(list_id), json=body)

        def apply(_):
            self.refresh_list(list_id, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to add item", scope=scope)

    def toggle_item(self, list_id, item_id, scope=None):
        previous = self._set_items(lambda items: [
            item.model_copy(update={'is_checked': not item.is_checked, 'is_purchased': not item.is_checked})
            if item.id == item_id else item
            for item in items
        ])

        def fetch():
            self.api.request_empty(endpoints.toggle_shopping_item(list_id, item_id))

        def apply(_):
            self.refresh_list(list_id, scope=scope)

        return self._optimistic(fetch, apply, previous, "Failed to update item", scope)

    def delete_item(self, list_id, item_id, scope=None):
        previous = self._set_items(lambda items: [item for item in items if item.id != item_id])

        def fetch():
            self.api.request_empty(endpoints.delete_shopping_item(list_id, item_id))

        def apply(_):
            self.refresh_list(list_id, scope=scope)

        return self._optimistic(fetch, apply, previous, "Failed to delete item", scope)

    def clear_checked(self, list_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.clear_checked_items(list_id))

        def apply(_):
            self.refresh_list(list_id, scope=scope)

        return self.run_secondary(fetch, apply, scope=scope)

    def _set_items(self, change) -> Optional[ShoppingList]:
        """Apply ``change`` to the open list's items; returns the list as it was."""
        previous = self.selected
        if previous is not None and previous.items is not None:
            self.selected = _with_counts(previous.model_copy(update={'items': change(previous.items)}))
            self.notify()
        return previous

    def _optimistic(self, fetch, apply, previous, message, scope):
        def restore():
            self.selected = previous
            self.error_message = message

        return self.run_secondary(fetch, apply, scope=scope, on_failure=restore)

    # Local queries
    @property
    def unchecked_items(self) -> List[ShoppingItem]:
        return [item for item in self.selected_items if not item.is_checked]

    @property
    def checked_items(self) -> List[ShoppingItem]:
        return [item for item in self.selected_items if item.is_checked]

    @property
    def items_by_category(self) -> Dict[str, List[ShoppingItem]]:
        grouped = defaultdict(list)
        for item in self.unchecked_items:
            grouped[item.category_key].append(item)
        return dict(grouped)


def _with_counts(shopping_list: ShoppingList) -> ShoppingList:
    items = shopping_list.items or []
    checked = sum(1 for item in items if item.is_checked)
    return shopping_list.model_copy(update={
        'items_count': len(items),
        'purchased_count': checked,
        'unchecked_count': len(items) - checked,
    })


def _merge_items(response: ShoppingListDetailResponse) -> ShoppingList:
    """The detail payload sends items beside the list; fold them in and recount."""
    shopping_list = response.list
    if response.items is None:
        return shopping_list
    return _with_counts(shopping_list.model_copy(update={'items': response.items}))
