import io

import pytest

from loanbank.accounts import AccountStore, User
from loanbank.calculator import calculate_emi, home_loan_limit, Profession
from loanbank.cli import BankApp, main
from loanbank.records import LoanRecord, RecordBook

PASSWORD = "password"
NID = 4242
NAME = "Alice Example"
EMAIL = "alice@example.com"


def scripted(lines):
    answers = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    return fake_input


def make_app(tmp_path, lines):
    out = io.StringIO()
    return BankApp(tmp_path, scripted(lines), out), out


def store(tmp_path):
    return AccountStore(tmp_path / "user_details.txt", tmp_path / "nid_pass.txt")


def register(tmp_path):
    store(tmp_path).create(NID, NAME, EMAIL, PASSWORD)


def login_lines():
    return ["2", str(NID), PASSWORD]


def test_create_account_then_exit(tmp_path):
    app, out = make_app(tmp_path, ["1", NAME, str(NID), EMAIL, PASSWORD, "2"])
    assert app.run() == 0
    assert store(tmp_path).find_user(NID) == User(NID, NAME, EMAIL)
    assert store(tmp_path).authenticate(NID, PASSWORD) is True
    assert "THANKS FOR USING OUR BANK" in out.getvalue()


def test_create_account_reprompts_taken_nid(tmp_path):
    register(tmp_path)
    app, out = make_app(
        tmp_path, ["1", "Bob Example", str(NID), "77", "bob@example.com", PASSWORD, "2"]
    )
    app.run()
    assert "This NID already exists!!" in out.getvalue()
    assert store(tmp_path).find_user(77) == User(77, "Bob Example", "bob@example.com")


def test_create_account_reprompts_long_password(tmp_path):
    app, out = make_app(
        tmp_path, ["1", NAME, str(NID), EMAIL, "muchtoolongpassword", PASSWORD, "2"]
    )
    app.run()
    assert "Password exceeds limit" in out.getvalue()
    assert store(tmp_path).authenticate(NID, PASSWORD) is True
    assert store(tmp_path).authenticate(NID, "muchtoolongpassword") is False


def test_failed_login_then_exit(tmp_path):
    register(tmp_path)
    app, out = make_app(tmp_path, ["2", str(NID), "wrong", "3"])
    assert app.run() == 0
    assert "NID or password is incorrect" in out.getvalue()
    assert app.nid is None


def test_login_sets_user(tmp_path):
    register(tmp_path)
    app, _ = make_app(tmp_path, [str(NID), PASSWORD])
    assert app.login() is True
    assert app.nid == NID
    assert app.user == User(NID, NAME, EMAIL)


def test_wrong_opening_option(tmp_path):
    app, out = make_app(tmp_path, ["9"])
    assert app.run() == 0
    assert "wrong option" in out.getvalue()


def test_end_of_input_ends_session(tmp_path):
    app, _ = make_app(tmp_path, ["2", str(NID)])
    assert app.run() == 0
    assert not (tmp_path / "personal_loan_records.txt").exists()


def test_personal_loan_is_recorded(tmp_path):
    register(tmp_path)
    app, _ = make_app(tmp_path, login_lines() + ["2", "1", "30", "1", "35000", "100000"])
    app.run()
    record = RecordBook(tmp_path / "personal_loan_records.txt").find(NID)
    assert record.loan == pytest.approx(100000)
    assert record.emi == pytest.approx(calculate_emi(100000, 36), abs=1e-3)
    assert record.repayment == pytest.approx(record.emi * 36, abs=1e-1)
    assert record.due == pytest.approx(record.repayment)
    assert record.paid == 0


def test_personal_loan_over_limit_retries(tmp_path):
    register(tmp_path)
    app, out = make_app(
        tmp_path, login_lines() + ["2", "1", "30", "1", "35000", "600000", "200000"]
    )
    app.run()
    record = RecordBook(tmp_path / "personal_loan_records.txt").find(NID)
    assert record.loan == pytest.approx(200000)
    assert "You can not take this ammount of loan" in out.getvalue()


def test_personal_loan_gives_up_after_attempts(tmp_path):
    register(tmp_path)
    app, out = make_app(
        tmp_path,
        login_lines() + ["2", "1", "30", "1", "35000", "600000", "600000", "600000", "600000"],
    )
    app.run()
    assert RecordBook(tmp_path / "personal_loan_records.txt").find(NID) is None
    assert "Try again form start" in out.getvalue()


def test_personal_loan_low_income_refused(tmp_path):
    register(tmp_path)
    app, out = make_app(tmp_path, login_lines() + ["2", "1", "30", "1", "25000"])
    app.run()
    assert "minimum requirment of monthly income" in out.getvalue()
    assert RecordBook(tmp_path / "personal_loan_records.txt").find(NID) is None


def test_personal_loan_age_refused(tmp_path):
    register(tmp_path)
    app, out = make_app(tmp_path, login_lines() + ["2", "1", "18"])
    app.run()
    assert "21-70 years old" in out.getvalue()
    assert RecordBook(tmp_path / "personal_loan_records.txt").find(NID) is None


def test_existing_personal_loan_blocks_new_one(tmp_path):
    register(tmp_path)
    book = RecordBook(tmp_path / "personal_loan_records.txt")
    book.append(LoanRecord(NID, 1000.0, 1100.0, 100.0, 100.0))
    app, out = make_app(tmp_path, login_lines() + ["2", "1", "30", "1", "35000", "1000"])
    app.run()
    assert "allready have personal loan" in out.getvalue()
    assert len(list(book.records())) == 1


def test_home_loan_is_recorded(tmp_path):
    register(tmp_path)
    app, out = make_app(
        tmp_path, login_lines() + ["2", "2", "30", "1", "50000", "3", "1", "1000000"]
    )
    app.run()
    record = RecordBook(tmp_path / "home_loan_records.txt").find(NID)
    assert record.loan == pytest.approx(1000000)
    assert record.emi == pytest.approx(calculate_emi(1000000, 120), abs=1e-3)
    assert "LOAN APPROVED!" in out.getvalue()
    limit = home_loan_limit(Profession.JOB_HOLDER, 50000, 3, 10)
    assert f"{limit:.0f} BDT" in out.getvalue()


def test_home_loan_experience_refused(tmp_path):
    register(tmp_path)
    app, out = make_app(tmp_path, login_lines() + ["2", "2", "30", "1", "50000", "1"])
    app.run()
    assert "minimum job exprience 2 years" in out.getvalue()
    assert RecordBook(tmp_path / "home_loan_records.txt").find(NID) is None


def test_home_loan_wrong_term_option(tmp_path):
    register(tmp_path)
    app, out = make_app(
        tmp_path, login_lines() + ["2", "2", "30", "2", "60000", "5", "7"]
    )
    app.run()
    assert "Wrong option" in out.getvalue()
    assert RecordBook(tmp_path / "home_loan_records.txt").find(NID) is None


def test_pay_emi_reduces_due(tmp_path):
    register(tmp_path)
    book = RecordBook(tmp_path / "personal_loan_records.txt")
    original = LoanRecord(NID, 1000.0, 1100.0, 100.0, 100.0)
    book.append(original)
    app, out = make_app(tmp_path, login_lines() + ["1", "1", "100"])
    app.run()
    record = book.find(NID)
    assert record.paid == pytest.approx(100)
    assert record.due == pytest.approx(original.due - 100)
    assert "Thanks for using our bank" in out.getvalue()


def test_pay_emi_full_then_record_removed(tmp_path):
    register(tmp_path)
    book = RecordBook(tmp_path / "home_loan_records.txt")
    book.append(LoanRecord(NID, 1000.0, 1100.0, 100.0, 100.0))
    app, out = make_app(tmp_path, [str(NID), PASSWORD, "1100"])
    assert app.login() is True
    app.pay_emi("home")
    assert "Your payment is completed" in out.getvalue()
    assert book.find(NID).due == pytest.approx(0)
    app.pay_emi("home")
    assert "You have no more due" in out.getvalue()
    assert book.find(NID) is None


def test_pay_emi_without_record(tmp_path):
    register(tmp_path)
    app, out = make_app(tmp_path, login_lines() + ["1", "2"])
    app.run()
    assert "don't have any record of loan" in out.getvalue()


def test_pay_emi_unknown_kind(tmp_path):
    app, _ = make_app(tmp_path, [])
    with pytest.raises(ValueError):
        app.pay_emi("car")


def test_main_uses_directory(tmp_path, monkeypatch):
    monkeypatch.setattr(
        "builtins.input", scripted(["1", NAME, str(NID), EMAIL, PASSWORD, "2"])
    )
    assert main(["--directory", str(tmp_path)]) == 0
    assert store(tmp_path).find_user(NID) == User(NID, NAME, EMAIL)