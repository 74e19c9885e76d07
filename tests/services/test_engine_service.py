"""
Tests for EngineService: deserialize -> apply -> serialize.

The service must keep going past malformed rows and rejected transactions,
counting and logging each of them.
"""

from io import StringIO

from payments_config.schema import EngineConfig
from payments_ingestion.adapters.base import SourceAdapter
from payments_ingestion.exceptions import ParseError
from payments_kernel.domain.ledger import Ledger
from payments_kernel.domain.values import Amount, ClientId
from payments_services.engine_service import EngineService

HAPPY_INPUT = """type,client,tx,amount
                deposit,1,1,1.2345
                withdrawal,1,2,0
                dispute,1,1,
                resolve,1,1,
                dispute,1,1
                chargeback,1,1,1.000,sarasa,some extra,sarasovich
                deposit,2,1,1.2345
                deposit,2,2,5.4321
                dispute,2,2,"""


def run(text: str, config: EngineConfig | None = None):
    service = EngineService(config)
    report = service.run_stream(StringIO(text))
    out = StringIO()
    service.write(report, out)
    return report, out.getvalue()


def test_deserialize_apply_serialize():
    report, output = run(HAPPY_INPUT)
    assert report.records_read == 9
    assert report.transactions_applied == 9
    assert report.rejected == 0
    assert output == (
        "client,available,held,total,locked\n"
        "1,0.0000,0.0000,0.0000,true\n"
        "2,1.2345,5.4321,6.6666,false\n"
    )


def test_bad_rows_and_rejections_are_counted_not_fatal():
    text = """type,client,tx,amount
deposit,1,1,10.00
deposit,1,2,-5
withdrawal,1,3,
teleport,1,4,1
withdrawal,1,5,30.00
dispute,1,99,
withdrawal,1,6,2.5
"""
    report, output = run(text)
    assert report.records_read == 7
    assert report.records_rejected == 3
    assert report.transactions_rejected == 2
    assert report.transactions_applied == 2
    assert report.rejections_by_code == {
        "INVALID_FIELD": 1,
        "MISSING_AMOUNT": 1,
        "UNKNOWN_TRANSACTION_TYPE": 1,
        "INSUFFICIENT_FUNDS": 1,
        "DEPOSIT_NOT_FOUND": 1,
    }
    assert output.splitlines()[1] == "1,7.5000,0.0000,7.5000,false"


def test_locked_account_ignores_later_transactions():
    text = """type,client,tx,amount
deposit,1,1,10
dispute,1,1,
chargeback,1,1,
deposit,1,2,100
"""
    report, output = run(text)
    assert report.rejections_by_code == {"ACCOUNT_LOCKED": 1}
    assert output.splitlines()[1] == "1,0.0000,0.0000,0.0000,true"


def test_empty_input_writes_header_only():
    report, output = run("")
    assert report.records_read == 0
    assert output == "client,available,held,total,locked\n"


def test_output_places_from_config():
    _, output = run("type,client,tx,amount\ndeposit,3,1,1.005\n", EngineConfig(output_decimal_places=2))
    assert output.splitlines()[1] == "3,1.00,0.00,1.00,false"


def test_delimiter_from_config():
    report, _ = run("type;client;tx;amount\ndeposit;3;1;1\n", EngineConfig(delimiter=";"))
    assert report.transactions_applied == 1


def test_run_path(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(HAPPY_INPUT, encoding="utf-8")
    service = EngineService()
    report = service.run_path(path)
    assert report.transactions_applied == 9


def test_existing_ledger_is_reused():
    ledger = Ledger()
    service = EngineService(ledger=ledger)
    service.run_stream(StringIO("type,client,tx,amount\ndeposit,4,1,2\n"))
    service.run_stream(StringIO("type,client,tx,amount\nwithdrawal,4,2,0.5\n"))
    assert service.ledger is ledger
    assert ledger.accounts[ClientId(4)].balance.available == Amount.of("1.5")


def test_rejections_are_logged(log_capture):
    text = """type,client,tx,amount
deposit,1,1,5
bogus,1,2,1
withdrawal,1,3,50
"""
    run(text)

    rejected_record = log_capture.by_message("record_rejected")
    assert len(rejected_record) == 1
    assert rejected_record[0]["error_code"] == "UNKNOWN_TRANSACTION_TYPE"
    assert rejected_record[0]["source_row"] == 3
    assert rejected_record[0]["level"] == "WARNING"

    rejected_txn = log_capture.by_message("transaction_rejected")
    assert len(rejected_txn) == 1
    assert rejected_txn[0]["error_code"] == "INSUFFICIENT_FUNDS"
    assert rejected_txn[0]["client"] == 1
    assert rejected_txn[0]["tx"] == 3
    assert rejected_txn[0]["transaction_type"] == "withdrawal"

    completed = log_capture.by_message("run_completed")
    assert completed[0]["records_read"] == 3
    assert completed[0]["run_id"] == log_capture.by_message("run_started")[0]["run_id"]
    assert len(log_capture.by_message("transaction_applied")) == 1


# ---------------------------------------------------------------------------
# Unreadable and out-of-range rows never abort the stream
# ---------------------------------------------------------------------------

HOSTILE_ROWS = (
    b"type,client,tx,amount\n"
    b"deposit,1,1,1.0\n"
    b"deposit,1,2,\xff\xfe\n"
    b"deposit,1,3," + b"9" * 200_000 + b"\n"
    b"deposit,1,4,1E+50000000\n"
    b"deposit,+5,5,1.0\n"
    b"deposit,1,6,2.0\r\n"
)


def test_hostile_rows_are_rejected_and_valid_rows_survive(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_bytes(HOSTILE_ROWS)
    service = EngineService()
    report = service.run_path(path)
    out = StringIO()
    service.write(report, out)

    assert report.records_read == 6
    assert report.transactions_applied == 2
    assert report.rejections_by_code == {"PARSE_ERROR": 2, "INVALID_FIELD": 2}
    assert out.getvalue() == (
        "client,available,held,total,locked\n"
        "1,3.0000,0.0000,3.0000,false\n"
    )


def test_unreadable_row_is_logged(tmp_path, log_capture):
    path = tmp_path / "transactions.csv"
    path.write_bytes(b"type,client,tx,amount\ndeposit,1,1,\xff\n")
    EngineService().run_path(path)

    rejected = log_capture.by_message("record_rejected")
    assert len(rejected) == 1
    assert rejected[0]["error_code"] == "PARSE_ERROR"
    assert rejected[0]["source_row"] == 2


def test_wide_magnitude_amounts_add_exactly():
    text = "type,client,tx,amount\ndeposit,1,1,1E+60\ndeposit,1,2,1\n"
    report, output = run(text)
    assert report.transactions_applied == 2
    assert output.splitlines()[1].split(",")[1] == "1" + "0" * 59 + "1.0000"


class _FixedRowsAdapter:
    """A non-CSV source: serves pre-built records."""

    def __init__(self, rows):
        self._rows = rows

    def read(self, stream, options):
        return iter(record for _, record in self._rows)

    def read_path(self, source_path, options):
        return self.read(None, options)

    def read_numbered(self, stream, options):
        return iter(self._rows)


def test_any_source_adapter_can_feed_the_service():
    adapter = _FixedRowsAdapter(
        [
            (1, {"type": "deposit", "client": "9", "tx": "1", "amount": "4"}),
            (2, ParseError("unexpected end of data", 2)),
        ]
    )
    assert isinstance(adapter, SourceAdapter)
    report = EngineService(adapter=adapter).run_stream(StringIO(""))
    assert report.transactions_applied == 1
    assert report.rejections_by_code == {"PARSE_ERROR": 1}
