"""Access guard - allows or denies an operation for the acting principal."""

from typing import Any

from samplepool.application.authorization.ability import Ability, build_ability
from samplepool.application.authorization.operations import Operation, get_operation
from samplepool.domain.entities import User
from samplepool.domain.exceptions import AuthenticationRequired, PermissionDenied


class AccessGuard:
    """Checks an operation's required permissions against the principal's ability."""

    def authorize(
        self,
        principal: User | None,
        operation: Operation | str,
        instance: Any = None,
    ) -> Ability | None:
        """Raise unless principal may run operation; return the ability used (None if anonymous).

        All requirements must pass. instance, when given, is matched by id against
        instance-scoped grants.
        """
        if isinstance(operation, str):
            operation = get_operation(operation)

        if principal is None:
            if operation.public and not operation.permissions:
                return None
            raise AuthenticationRequired("Authentication required")

        ability = build_ability(principal)
        for requirement in operation.permissions:
            if not ability.can(requirement.action, requirement.resource, instance):
                raise PermissionDenied("Insufficient permissions")
        return ability
