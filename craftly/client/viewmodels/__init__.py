from craftly.client.viewmodels.auth import LoginViewModel, RegisterViewModel, destination_for
from craftly.client.viewmodels.cart import CartViewModel
from craftly.client.viewmodels.chat import ChatViewModel
from craftly.client.viewmodels.favorites import FavoritesViewModel
from craftly.client.viewmodels.notifications import NotificationsViewModel
from craftly.client.viewmodels.orders import OrdersViewModel
from craftly.client.viewmodels.products import ProductsViewModel
from craftly.client.viewmodels.state import Error, Idle, Loading, Success, UiState, ViewModel

__all__ = [
    "CartViewModel",
    "ChatViewModel",
    "Error",
    "FavoritesViewModel",
    "Idle",
    "LoginViewModel",
    "Loading",
    "NotificationsViewModel",
    "OrdersViewModel",
    "ProductsViewModel",
    "RegisterViewModel",
    "Success",
    "UiState",
    "ViewModel",
    "destination_for",
]
