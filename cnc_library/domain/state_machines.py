"""State machines for domain entities.

Defines the publication lifecycle of a catalog product. Dealers move
products between DRAFT and PENDING_REVIEW; admins publish, reject or
hide them.
"""

from enum import Enum

from cnc_library.domain.exceptions import InvalidStateTransitionError


class PublicationStatus(str, Enum):
    """Product publication states.

    Transitions:
        DRAFT          -> PENDING_REVIEW (submit), PUBLISHED (publish),
                          REJECTED (reject)
        PENDING_REVIEW -> PUBLISHED (publish), REJECTED (reject),
                          DRAFT (withdraw)
        PUBLISHED      -> DRAFT (hide), REJECTED (reject)
        REJECTED       -> DRAFT, PENDING_REVIEW (resubmit), PUBLISHED (publish)

    Admins may publish any product that is not published yet and reject any
    product that is not rejected yet.
    """

    DRAFT = "DRAFT"
    PENDING_REVIEW = "PENDING_REVIEW"
    PUBLISHED = "PUBLISHED"
    REJECTED = "REJECTED"

    def can_transition_to(self, target: "PublicationStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _PUBLICATION_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["PublicationStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return sorted(_PUBLICATION_TRANSITIONS.get(self, set()), key=lambda s: s.value)

    def is_public(self) -> bool:
        """Check if products in this state are visible to customers."""
        return self == PublicationStatus.PUBLISHED

    def is_awaiting_review(self) -> bool:
        """Check if an admin decision is pending."""
        return self == PublicationStatus.PENDING_REVIEW


# Transitions are defined outside the enum to avoid Enum member restrictions
_PUBLICATION_TRANSITIONS: dict[PublicationStatus, set[PublicationStatus]] = {
    PublicationStatus.DRAFT: {
        PublicationStatus.PENDING_REVIEW,
        PublicationStatus.PUBLISHED,
        PublicationStatus.REJECTED,
    },
    PublicationStatus.PENDING_REVIEW: {
        PublicationStatus.PUBLISHED,
        PublicationStatus.REJECTED,
        PublicationStatus.DRAFT,
    },
    PublicationStatus.PUBLISHED: {PublicationStatus.DRAFT, PublicationStatus.REJECTED},
    PublicationStatus.REJECTED: {
        PublicationStatus.DRAFT,
        PublicationStatus.PENDING_REVIEW,
        PublicationStatus.PUBLISHED,
    },
}


def validate_publication_transition(
    product_id: str,
    current: PublicationStatus,
    target: PublicationStatus,
) -> None:
    """Validate a publication status transition.

    Args:
        product_id: Product identifier for error reporting.
        current: Current status.
        target: Target status.

    Raises:
        InvalidStateTransitionError: If transition is not allowed.
    """
    if not current.can_transition_to(target):
        raise InvalidStateTransitionError(
            entity_type="Product",
            entity_id=product_id,
            current_state=current.value,
            target_state=target.value,
            allowed_transitions=[s.value for s in current.allowed_transitions()],
        )
