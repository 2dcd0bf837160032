"""Interactive bank console: accounts, loan applications and EMI payments."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional

from .accounts import AccountError, AccountStore, User, validate_password
from .calculator import (
    HOME_LOAN_YEARS,
    EligibilityError,
    LoanQuote,
    Profession,
    amount_within_limit,
    home_loan_limit,
    personal_loan_terms,
    quote,
)
from .records import LoanRecord, RecordBook

USER_FILE = "user_details.txt"
NID_FILE = "nid_pass.txt"
PERSONAL_LOAN_FILE = "personal_loan_records.txt"
HOME_LOAN_FILE = "home_loan_records.txt"

AMOUNT_ATTEMPTS = 3
PERSONAL_AGE_RANGE = (21, 70)
HOME_AGE_RANGE = (25, 70)

_SIGNUP_PROMPT = "Set password (max 8 characters): "
_RETRY_PROMPT = "Try again: "
_LOGIN_PROMPT = "Password: "


class BankApp:
    """The text-menu front end of the bank, reading answers from ``input_func``."""

    def __init__(
        self,
        directory=".",
        input_func: Optional[Callable[[str], str]] = None,
        output=None,
    ) -> None:
        self.directory = Path(directory)
        self.accounts = AccountStore(self.directory / USER_FILE, self.directory / NID_FILE)
        self.books = {
            "personal": RecordBook(self.directory / PERSONAL_LOAN_FILE),
            "home": RecordBook(self.directory / HOME_LOAN_FILE),
        }
        self._input = input_func if input_func is not None else input
        self.output = output if output is not None else sys.stdout
        self.nid: Optional[int] = None
        self.user: Optional[User] = None

    # -- terminal helpers -------------------------------------------------

    def _say(self, *lines: str) -> None:
        for line in lines:
            print(line, file=self.output)

    def _title(self, text: str) -> None:
        self._say(f"==================== {text} =====================")

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _ask_int(self, prompt: str) -> Optional[int]:
        try:
            return int(self._ask(prompt))
        except ValueError:
            return None

    def _ask_float(self, prompt: str) -> Optional[float]:
        try:
            return float(self._ask(prompt))
        except ValueError:
            return None

    # -- top level ---------------------------------------------------------

    def run(self) -> int:
        """Show the opening menu and serve one session; return an exit status."""
        self._title("O U R BANK")
        try:
            self._say(
                "+--------------------------------+",
                "|   MENU:                        |",
                "|   1.Create a New Account       |",
                "|   2.Log In to Existing Account |",
                "|   3.Exit                       |",
                "+--------------------------------+",
            )
            option = self._ask_int("Enter your option (1-3): ")
            if option == 1:
                self.create_account()
            elif option == 2:
                if self.login():
                    self.main_screen()
                else:
                    self._retry_menu()
            elif option == 3:
                pass
            else:
                self._say("You entered wrong option. The program is closing....")
        except EOFError:
            self._say("")
        return 0

    def _retry_menu(self) -> None:
        while True:
            self._say(
                "+----------------------------+",
                "|         MAIN MENU          |",
                "+----------------------------+",
                "| 1. Create Account          |",
                "| 2. Login                   |",
                "| 3. Exit                    |",
                "+----------------------------+",
            )
            option = self._ask_int("")
            if option == 1:
                if self.create_account():
                    return
            elif option == 2:
                if self.login():
                    self.main_screen()
                    return
            elif option == 3:
                return

    # -- accounts ----------------------------------------------------------

    def _ask_nid(self, prompt: str) -> int:
        while True:
            nid = self._ask_int(prompt)
            if nid is not None:
                return nid
            self._say("Please enter your NID as a number.")
            prompt = _RETRY_PROMPT

    def create_account(self) -> bool:
        """Sign a new user up; return True if they went on to log in."""
        self._title("CREATE ACCOUNT")
        name = self._ask("Please enter your full name: ")
        nid = self._ask_nid("Enter your NID number: ")
        while self.accounts.nid_taken(nid):
            self._say("This NID already exists!!")
            nid = self._ask_nid(_RETRY_PROMPT)
        email = self._ask("Your email: ")
        password = self._ask(_SIGNUP_PROMPT)
        while True:
            try:
                validate_password(password)
                break
            except AccountError as error:
                self._say(str(error))
                password = self._ask(_RETRY_PROMPT)
        try:
            self.accounts.create(nid, name, email, password)
        except AccountError as error:
            self._say(str(error))
            return False

        self._say(
            "----> Your account is created successfully !! <----",
            "+--------------------------------+",
            "  Do you want to log in now?",
            "  1. Yes log in.",
            "  2. Exit",
            "+--------------------------------+",
        )
        if self._ask_int("Choose option: ") != 1:
            self._say("--> THANKS FOR USING OUR BANK <--")
            return False
        while not self.login():
            pass
        self.main_screen()
        return True

    def login(self) -> bool:
        """Ask for NID and password; remember the user if they match."""
        self._title("LOG IN")
        nid = self._ask_int("Your NID: ")
        password = self._ask(_LOGIN_PROMPT)
        if nid is None:
            self._say("----> NID or password is incorrect <----")
            return False
        try:
            valid = self.accounts.authenticate(nid, password)
        except AccountError as error:
            self._say(str(error))
            return False
        if not valid:
            self._say("----> NID or password is incorrect <----")
            return False
        self.nid = nid
        self.user = self.accounts.find_user(nid)
        self._say("----> Log in succesfull <----")
        return True

    # -- loans -------------------------------------------------------------

    def main_screen(self) -> None:
        """Offer paying an EMI or taking a loan."""
        self._say("Options: ", ">> 1. PAY EMI", ">> 2. Take Loan")
        option = self._ask_int("Enter option: ")
        if option == 1:
            self._say("Your loan type: ", ">> 1. Personal loan", ">> 2. Home loan")
            kind = {1: "personal", 2: "home"}.get(self._ask_int("Enter option: "))
            if kind is None:
                self._say("Wrong option")
            else:
                self.pay_emi(kind)
        elif option == 2:
            self._say("Options: ", ">> 1. Personal loan", ">> 2. Home loan")
            choice = self._ask_int("Enter option: ")
            if choice == 1:
                if self.books["personal"].exists(self.nid):
                    self._say(
                        "You allready have personal loan in OUR bank. Please complete "
                        "your repayment then try to take another loan.",
                        "--> THANK YOU FOR USING OUR BANK <--",
                    )
                else:
                    self.personal_loan()
            elif choice == 2:
                if self.books["home"].exists(self.nid):
                    self._say(
                        "You already have a home loan in OUR bank. Please complete "
                        "your repayment before taking another loan.",
                        "--> THANK YOU FOR USING OUR BANK <--",
                    )
                else:
                    self.home_loan()
        else:
            self._say("--> Wrong option <---")

    def pay_emi(self, kind: str) -> None:
        """Take a payment towards the logged-in user's loan of ``kind``."""
        try:
            book = self.books[kind]
        except KeyError:
            raise ValueError(f"unknown loan kind: {kind!r}") from None
        record = book.find(self.nid) if self.nid is not None else None
        if record is None:
            self._say("--> You don't have any record of loan till now <--")
            return
        if record.due <= 0:
            self._say("You have no more due")
            book.delete_completed(record.nid)
            return
        self._say(f"Your due ammount: {record.due:.3f}")
        amount = self._ask_float("Enter pay amount: ")
        if amount is None or amount < 0:
            self._say("Invalid amount.")
            return
        updated = book.pay(record.nid, amount)
        if updated.due <= 0:
            self._say(
                "Your payment is completed... We are deleting your previous records "
                "and now you are open for other loans."
            )
        self._say("--> Thanks for using our bank <--")

    def _greet(self, low: int, high: int) -> Optional[int]:
        if self.nid is None:
            self._say("ERROR")
            return None
        user = self.accounts.find_user(self.nid)
        if user is None:
            self._say("ERROR")
            return None
        self.user = user
        self._say(
            f"Hello {user.name} !! Please fill-up the from below",
            f"<<NOTE>> You have to be in {low}-{high} years old",
        )
        age = self._ask_int(">> AGE: ")
        if age is None or not low <= age <= high:
            self._say(f"You have to be in {low}-{high} years old !! ")
            return None
        return age

    def _ask_profession(self) -> Optional[Profession]:
        self._say("Profession:", ">> 1. Job Holder", ">> 2. Own Business")
        option = self._ask_int(">> Choose option: ")
        try:
            return Profession(option)
        except ValueError:
            self._say("Wrong option !!")
            return None

    def _read_amount(self, limit: float) -> Optional[float]:
        amount = self._ask_float("Enter loan ammount: ")
        if amount is not None and amount_within_limit(amount, limit):
            return amount
        for attempt in range(AMOUNT_ATTEMPTS):
            left = AMOUNT_ATTEMPTS - attempt
            self._say(
                "You can not take this ammount of loan !!",
                f"Enter a positive amount under your limit which is {limit:.0f} BDT.",
                "LAST ATTEMP" if left == 1 else f"{left} attemps left",
            )
            amount = self._ask_float("Loan ammount: ")
            if amount is not None and amount_within_limit(amount, limit):
                return amount
        self._say("SORRY !! Try again form start")
        return None

    def _print_quote(self, loan: LoanQuote) -> None:
        self._say(
            f"---> EMI: BDT {loan.emi:.3f} per month",
            f"---> Total Repayment: BDT {loan.repayment:.3f}",
            f"---> Total Interest: BDT {loan.interest:.3f}",
            "Thanks for choosing our bank",
        )

    def _record(self, kind: str, loan: LoanQuote) -> None:
        self.books[kind].append(
            LoanRecord(self.nid, loan.amount, loan.repayment, loan.emi, loan.interest)
        )

    def personal_loan(self) -> None:
        """Apply for a personal loan for the logged-in user."""
        if self._greet(*PERSONAL_AGE_RANGE) is None:
            return
        profession = self._ask_profession()
        if profession is None:
            return
        if profession is Profession.JOB_HOLDER:
            self._say("<<NOTE>> Minimum salary requirement is 30,000 BDT")
            income = self._ask_float(">> Monthly salary: ")
        else:
            self._say("<<NOTE>> Minimum profit requirement is 40,000 BDT")
            income = self._ask_float(">> Monthly profit: ")
        try:
            limit, months = personal_loan_terms(profession, income if income is not None else 0.0)
        except EligibilityError as error:
            self._say(str(error))
            return
        self._say(f"You are eligible for upto {limit / 100000:g} lakh BDT.")
        amount = self._read_amount(limit)
        if amount is None:
            return
        loan = quote(amount, months)
        self._print_quote(loan)
        self._record("personal", loan)

    def home_loan(self) -> None:
        """Apply for a home loan for the logged-in user."""
        if self._greet(*HOME_AGE_RANGE) is None:
            return
        profession = self._ask_profession()
        if profession is None:
            return
        if profession is Profession.JOB_HOLDER:
            self._say(
                "<<NOTE>> Minimum salary requirement is 40,000 BDT and minimum "
                "job experience 2 years"
            )
            income = self._ask_float(">> Monthly salary: ")
            experience = self._ask_int(">> Job exprience: ")
        else:
            self._say(
                "<<NOTE>> Per month minimum profit requirement is 50,000 BDT and "
                "minimum 3 years of business operation"
            )
            income = self._ask_float(">> Monthly profit: ")
            experience = self._ask_int(">> Years of buisness operation: ")
        income = income if income is not None else 0.0
        experience = experience if experience is not None else 0
        try:
            home_loan_limit(profession, income, experience, HOME_LOAN_YEARS[0])
        except EligibilityError as error:
            self._say(str(error))
            return
        self._say("Choose your return time:")
        self._say(*(f"{n}. {years} years" for n, years in enumerate(HOME_LOAN_YEARS, 1)))
        option = self._ask_int("choose option: ")
        if option is None or not 1 <= option <= len(HOME_LOAN_YEARS):
            self._say("Wrong option")
            return
        years = HOME_LOAN_YEARS[option - 1]
        limit = home_loan_limit(profession, income, experience, years)
        self._say(f"You are eligible for upto {limit:.0f} BDT.")
        amount = self._read_amount(limit)
        if amount is None:
            return
        loan = quote(amount, years * 12)
        self._print_quote(loan)
        self._say(
            "+======================================+",
            "|          LOAN APPROVED!             |",
            "+--------------------------------------+",
        )
        self._record("home", loan)


def main(argv=None) -> int:
    """Start the bank console in the given data directory."""
    parser = argparse.ArgumentParser(description="Bank loan console.")
    parser.add_argument(
        "-d",
        "--directory",
        default=".",
        help="directory holding the account and loan record files",
    )
    args = parser.parse_args(argv)
    return BankApp(args.directory).run()


if __name__ == "__main__":
    sys.exit(main())