"""Demonstration script for the warehouse, inventory log, grades, health and finance services."""

from __future__ import annotations

import argparse
import logging
import tempfile
from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from pprint import pprint
from typing import Optional, Sequence

from . import (
    AppConfig,
    ElectronicItem,
    HealthRecordsService,
    InventoryItem,
    InventoryLogService,
    Patient,
    Prescription,
    StudentResultProcessor,
    WarehouseService,
)
from .finance import (
    BankTransferProcessor,
    CryptoWalletProcessor,
    FinanceService,
    MobileMoneyProcessor,
    SavingsAccount,
    Transaction,
)
from .services import ensure_demo_data


def setup_logging(level: str, *, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(name)s [%(levelname)s]: %(message)s",
    )


def warehouse_demo(config: AppConfig) -> None:
    warehouse = WarehouseService(config=config)
    ensure_demo_data(warehouse)

    pprint(warehouse.groceries.render_all())
    pprint(warehouse.electronics.render_all())

    # Fehlerszenarien
    print(warehouse.electronics.add_item(
        ElectronicItem(id=1, name="Duplicate Laptop", quantity=5, brand="HP", warranty_months=24)
    ).message)
    print(warehouse.groceries.remove_by_id(999).message)
    print(warehouse.electronics.increase_stock(1, 5).message)
    print(warehouse.groceries.increase_stock(101, -55).message)


def inventory_log_demo(config: AppConfig, workdir: Path) -> None:
    log = InventoryLogService(config=config)
    log.store.path = workdir / Path(config.storage.data_file).name
    now = datetime.now()
    for item in (
        InventoryItem(id=1, name="Laptop", quantity=10, date_added=now - timedelta(days=10)),
        InventoryItem(id=2, name="Mouse", quantity=50, date_added=now - timedelta(days=5)),
        InventoryItem(id=3, name="Keyboard", quantity=25, date_added=now - timedelta(days=3)),
        InventoryItem(id=4, name="Monitor", quantity=8, date_added=now - timedelta(days=1)),
        InventoryItem(id=5, name="USB Cable", quantity=100, date_added=now),
    ):
        log.add(item)
    print(log.save().message)

    restored = InventoryLogService(store=log.store, config=config)
    print(restored.load().message)
    pprint(restored.render_all())


def grades_demo(config: AppConfig, workdir: Path) -> None:
    source = workdir / "grades_input.txt"
    source.write_text(
        "1, Ama Owusu, 84\n2, Kofi Mensah, 67\n3, Efua Asante, 49\n4, Yaw Boateng, 104\n",
        encoding="utf-8",
    )
    processor = StudentResultProcessor(config.validation.score_policy())
    result = processor.process(source, workdir / "grades_report.txt")
    print(result.message)
    if result.ok:
        print((workdir / "grades_report.txt").read_text(encoding="utf-8"))


def finance_demo() -> None:
    finance = FinanceService(SavingsAccount("SAV-22011137", Decimal("1000.00")))
    today = date.today()
    for transaction, processor in (
        (Transaction(1, today, Decimal("150.00"), "Groceries"), MobileMoneyProcessor()),
        (Transaction(2, today, Decimal("80.00"), "Utilities"), BankTransferProcessor()),
        (Transaction(3, today, Decimal("900.00"), "Entertainment"), CryptoWalletProcessor()),
    ):
        print(finance.submit(transaction, processor).message)
    print(f"Total transactions recorded: {len(finance.recorded())}")


def health_demo() -> None:
    health = HealthRecordsService()
    for patient in (
        Patient(id=1, name="Alice Johnson", age=34, gender="Female"),
        Patient(id=2, name="Bob Smith", age=52, gender="Male"),
        Patient(id=3, name="Carol White", age=29, gender="Female"),
    ):
        health.patients.add(patient)
    today = date.today()
    for prescription in (
        Prescription(101, 1, "Amoxicillin", today - timedelta(days=10)),
        Prescription(102, 1, "Ibuprofen", today - timedelta(days=5)),
        Prescription(103, 2, "Lisinopril", today - timedelta(days=8)),
        Prescription(104, 3, "Sertraline", today - timedelta(days=12)),
        Prescription(105, 2, "Atorvastatin", today - timedelta(days=3)),
    ):
        health.prescriptions.add(prescription)
    health.build_prescription_map()

    pprint(health.render_patients())
    pprint(health.render_prescriptions(1))
    pprint(health.render_prescriptions(2))


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Inventory system demo")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    config = AppConfig.from_environment()
    setup_logging(config.logging.level, verbose=args.verbose)

    warehouse_demo(config)
    with tempfile.TemporaryDirectory() as tmp:
        workdir = Path(tmp)
        inventory_log_demo(config, workdir)
        grades_demo(config, workdir)
    health_demo()
    finance_demo()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
