from .repayment_schedule import (
    Installment,
    ScheduleBalance,
    add_installment,
    generate_equal_installments,
    load_repayment_schedule,
    remove_installment,
    save_repayment_schedule,
    schedule_balance,
    update_installment,
)

__all__ = [
    "Installment",
    "ScheduleBalance",
    "add_installment",
    "generate_equal_installments",
    "load_repayment_schedule",
    "remove_installment",
    "save_repayment_schedule",
    "schedule_balance",
    "update_installment",
]
