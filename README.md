# ledgerpallets

`ledgerpallets` provides in-memory state-machine modules for a ledger-style runtime:

- **`ledgerpallets.banking`** keeps one banking account per holder. Opening an
  account moves its opening balance into the module's own account. Accounts
  can be linked as parents and children.
- **`ledgerpallets.trust`** keeps trust scores for validator nodes. A score
  rises when a node's vote matches consensus and changes by `decrease_fn` when
  it does not. A node whose score falls below 0.1 is flagged. A cleanup call
  removes flagged nodes.
- **`ledgerpallets.currency`** is a small balances ledger with an existential
  deposit and keep-alive transfers.
- **`ledgerpallets.chain`** holds the block number and the event log that the
  modules share. It also provides the signed-origin check.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Chain and origins

`Chain(block_number=0)` holds the current block number. `Chain.advance(blocks=1)`
moves it forward and returns the new number. A negative starting number or a
negative step raises `ValueError`.

The modules send their events to the chain through `Chain.deposit_event`.
`Chain.events` is a tuple of the events recorded so far. `Chain.take_events()`
returns them as a list and clears the log.

Every call takes an `origin`. Any hashable value counts as a signed origin, and
`None` stands for an unsigned one. `ensure_signed(origin)` returns the signer,
or raises `BadOrigin` when `origin` is `None`.

## Balances

```python
from ledgerpallets.currency import Balances, ExistenceRequirement

balances = Balances(existential_deposit=10)
balances.deposit("alice", 100)
balances.transfer("alice", "bob", 50)  # KEEP_ALIVE is the default
balances.transfer("alice", "bob", 45, ExistenceRequirement.ALLOW_DEATH)
assert balances.free_balance("alice") == 0
assert balances.free_balance("bob") == 95
```

`deposit` raises `CurrencyError` when the resulting balance would be below the
existential deposit. `transfer` behaves as follows:

- It raises `InsufficientBalance` when the source holds less than the amount.
- It raises `KeepAliveViolation` when, under `KEEP_ALIVE`, the source would
  drop below the existential deposit. Under `ALLOW_DEATH`, any remainder below
  the deposit is dropped instead.
- It raises `CurrencyError` when the destination would end up below the
  deposit.
- A zero amount, or a transfer from an account to itself, does nothing.
- A negative amount raises `ValueError`.

## Banking accounts

```python
from ledgerpallets.chain import Chain
from ledgerpallets.currency import Balances
from ledgerpallets.banking import BankingPallet, AccountCreated, Status

chain = Chain(block_number=1)
balances = Balances(existential_deposit=1)
balances.deposit("alice", 1_000)
balances.deposit("bob", 500)

bank = BankingPallet(chain, balances, name="BankingAccount")
bank.create_account(
    "alice",
    b"ACCT-0001", b"TEST0000001", b"Example Bank", b"Main", b"1 Example Street",
    None, None, None, None,
    b"savings",
    100,
)
bank.create_account(
    "bob",
    b"ACCT-0002", b"TEST0000001", b"Example Bank", b"Main", b"1 Example Street",
    None, None, None, None,
    b"current",
    50,
)

bank.add_sub_account("alice", "alice", "bob")
assert bank.bank_accounts("alice").child_accounts == ["bob"]
assert bank.bank_accounts("bob").parent_account == "alice"
assert bank.bank_accounts("alice").status is Status.OPERATIVE
assert balances.free_balance(bank.account_id()) == 150
```

The signer of `create_account` becomes the account holder. The new
`BankingAccount` has the following values:

- `opening_date` is the current block number.
- `status` is `Status.OPERATIVE`.
- `current_balance` is the initial balance.
- All service flags are off, and there is no parent and no children.

The opening balance is transferred from the holder to `account_id()` with
keep-alive. If that transfer fails, no account is recorded. `account_id()`
is `pallet_account_id(name)`: a 32-byte BLAKE2b digest of the length-prefixed
module name.

`bank_accounts(holder)` returns a copy of the stored account, or `None` if
there is none. Adding the same child twice does not duplicate it in
`child_accounts`.

Failures raise subclasses of `BankingError`:

- `AccountAlreadyExists` is raised when the holder already has an account.
- `AccountNotFound` is raised when the parent or the child has no account.
- `CannotAddSelfAsChild` is raised when the parent and the child are the same.

A transfer the ledger cannot make raises a `CurrencyError`. Events are
`AccountCreated(holder, balance)` and `SubAccountAdded(parent, child)`.

## Validator trust scores

```python
from ledgerpallets.chain import Chain
from ledgerpallets.trust import TrustScorePallet

chain = Chain(block_number=1)
trust = TrustScorePallet(chain)

trust.initialize_validator("root", "node-1")
trust.update_trust_score("root", "node-1", True)
print(trust.get_trust_score("node-1"))
print(trust.get_validators_by_trust())

trust.cleanup_validators("root")
```

A new validator starts with a `NodeTrustData` score of 0.5, stamped with the
current block number.

`update_trust_score(origin, validator, vote_matched)` updates the score as
follows:

- It adds `increase_fn(score)` when the vote matched.
- It subtracts `decrease_fn(score)` when the vote did not match.
- The result is rounded to single precision and kept between 0.0 and 1.0.
- It counts successful and failed validations and updates `last_updated`.
- It emits `ValidationSuccessful` or `ValidationFailed`, then
  `TrustScoreUpdated`.
- A failed vote that leaves the score below 0.1 flags the validator and emits
  `ValidatorRemoved`.
- A validator that is already flagged is left unchanged.
- An unknown validator raises `ValidatorNotFound`.

`cleanup_validators(origin)` deletes every flagged validator and emits
`ValidatorRemoved` again for each one. `trust_scores(validator)` returns a copy
of a validator's data. `validator_list()` returns the registered validators in
order. `get_validators_by_trust()` lists `(validator, score)` pairs, highest
score first.

The constructor's `max_trust_score`, `min_trust_score`, `success_reward` and
`failure_penalty` values are kept as attributes. The scoring does not read
them: the 0.0–1.0 bounds and the 0.1 threshold are fixed.
`TrustScoreTooLow` and `InvalidTrustScore` exist as `TrustError` subclasses
but no call raises them.

## What the package does not do

All state lives in memory in the objects you create. The package has no
persistent storage, no networking, no consensus and no command-line tool.
Nothing checks who is allowed to call what beyond the signed-origin check.
Balances in `BankingAccount.current_balance` are not updated after an account
is opened.