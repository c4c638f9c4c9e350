"""Account management — commands and handler.

``UpdateAccountProfile`` has upsert semantics: the account is created when
it does not exist yet, then only the fields present on the command are
merged into it.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from identity.account.account import Account
from identity.domain import identity

logger = structlog.get_logger(__name__)


@identity.command(part_of="Account")
class RegisterAccount:
    user_id: Identifier(required=True)
    email: String(max_length=254)
    display_name: String(max_length=200)


@identity.command(part_of="Account")
class UpdateAccountProfile:
    user_id: Identifier(required=True)
    email: String(max_length=254)
    display_name: String(max_length=200)
    role: String(max_length=20)
    address: Text()  # JSON object with the shipping address fields
    wishlist: Text()  # JSON array of product ids


@identity.command_handler(part_of=Account)
class ManageAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)
        try:
            existing = repo.get(command.user_id)
            return str(existing.user_id)
        except ObjectNotFoundError:
            pass

        account = Account.register(
            user_id=command.user_id,
            email=command.email,
            display_name=command.display_name,
        )
        repo.add(account)
        logger.info("Account registered", user_id=str(command.user_id))
        return str(account.user_id)

    @handle(UpdateAccountProfile)
    def update_account_profile(self, command):
        repo = current_domain.repository_for(Account)
        try:
            account = repo.get(command.user_id)
        except ObjectNotFoundError:
            account = Account.register(user_id=command.user_id, email=command.email)

        if command.display_name is not None or command.email is not None:
            account.rename(command.display_name or account.display_name, email=command.email)
        if command.role is not None:
            account.change_role(command.role)
        if command.address is not None:
            account.save_address(**json.loads(command.address))
        if command.wishlist is not None:
            account.replace_wishlist(json.loads(command.wishlist))

        repo.add(account)
        return str(account.user_id)
