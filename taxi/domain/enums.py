"""Domain enumerations."""

import enum


class TaxiOrderStatus(str, enum.Enum):
    WAITING_FOR_DRIVER = "WaitingForDriver"
    WAITING_CAR_ARRIVAL = "WaitingCarArrival"
    IN_PROGRESS = "InProgress"
    FINISHED = "Finished"
    CANCELED = "Canceled"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATUSES: frozenset[TaxiOrderStatus] = frozenset(
    {TaxiOrderStatus.FINISHED, TaxiOrderStatus.CANCELED}
)
