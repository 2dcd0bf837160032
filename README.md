# loanbank

A small interactive console bank. Customers open an account with their
national ID (NID), log in, apply for a personal or home loan and pay EMIs
(equated monthly instalments) against it. Accounts and loan records are
kept as plain text files in a data directory.

## Installation

    pip install .

## Running

    loanbank

The data files are read from and written to the current directory. To use
another directory:

    loanbank --directory path/to/data

The files used are `user_details.txt`, `nid_pass.txt`,
`personal_loan_records.txt` and `home_loan_records.txt`.

The program opens with a menu:

1. Create a new account: full name, NID, e-mail and a password. The
   password must be 1 to 8 characters with no spaces; name and e-mail must
   not be empty or contain tabs. An NID can only be registered once. After
   sign-up you may log in straight away.
2. Log in with NID and password. If the log-in fails, a second menu offers
   to create an account, log in again or exit.
3. Exit.

After logging in you can either pay an EMI or take a loan. Each run serves
one such action and then ends.

### Personal loans

Applicants must be 21–70 years old.

| Profession  | Monthly income      | Limit (BDT) | Term      |
|-------------|---------------------|-------------|-----------|
| Job holder  | 30,000 – 40,000     | 500,000     | 36 months |
| Job holder  | over 40,000 – 60,000| 1,000,000   | 60 months |
| Job holder  | above 60,000        | 2,000,000   | 84 months |
| Business    | 40,000 – 50,000     | 300,000     | 24 months |
| Business    | over 50,000 – 60,000| 1,000,000   | 36 months |
| Business    | above 60,000        | 2,000,000   | 60 months |

### Home loans

Applicants must be 25–70 years old. Job holders need at least 40,000 BDT
monthly salary and 2 years of experience; the limit is 40% of monthly
income times the number of months. Business owners need at least 50,000
BDT monthly profit and 3 years of operation; the limit is 50% of monthly
profit times the number of months. Terms are 10, 15, 20 or 25 years.

### Amounts and EMIs

A requested amount must be between 0 and the limit; after a wrong amount
there are three more tries. The EMI uses a monthly rate of 0.005833, and
the EMI, total repayment and total interest are shown and recorded.

Each customer may hold one loan of each kind at a time. A payment lowers
the due amount. Once nothing is due, choosing "PAY EMI" for that loan
again removes the record, after which a new loan of that kind can be taken.

## Library use

The building blocks can be used directly:

    from loanbank.calculator import Profession, personal_loan_terms, quote

    limit, months = personal_loan_terms(Profession.JOB_HOLDER, 50000)
    q = quote(800000, months)
    print(q.emi, q.repayment, q.interest)

- `loanbank.calculator`: `calculate_emi`, `quote` (returns a `LoanQuote`),
  `personal_loan_terms`, `home_loan_limit`, `amount_within_limit`,
  `Profession`; requirements that are not met raise `EligibilityError`.
- `loanbank.accounts`: `AccountStore` with `create`, `authenticate`,
  `nid_taken` and `find_user`; `validate_password`; failures raise
  `AccountError`.
- `loanbank.records`: `LoanRecord` (`format`, `parse`) and `RecordBook`
  with `records`, `find`, `exists`, `append`, `pay`, `update_payment` and
  `delete_completed`.
- `loanbank.cli`: `BankApp`, which takes a data directory, an input
  function and an output stream, and `main`.

## What it does not do

Passwords are stored in plain text in `nid_pass.txt`; there is no hashing
and no database. There is no way to list, edit or close accounts, and no
report of past payments beyond the paid and due amounts on each record.