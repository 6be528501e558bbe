import json

from sui_stablecoin_scripts.utils import confirm
from sui_stablecoin_scripts.utils.output import read_transaction_output, write_json_output


def test_write_json_output(logs_dir):
    path = write_json_output("mint", {"digest": "D1"})
    assert path.parent == logs_dir
    assert path.name.startswith("mint-") and path.suffix == ".json"
    assert json.loads(path.read_text()) == {"digest": "D1"}
    assert read_transaction_output(path) == {"digest": "D1"}


def test_prompt_confirmation_asks_until_answered(monkeypatch):
    answers = iter(["", "y", "yes", "Y"])
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr("builtins.input", fake_input)
    assert confirm.prompt_confirmation() is True
    assert prompts == ["Are you sure? (Y/N): "] * 4


def test_prompt_confirmation_declined(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "N")
    assert confirm.prompt_confirmation() is False


def test_confirmation():
    assert confirm.confirmation(True) is confirm.always_confirm
    assert confirm.confirmation(False) is confirm.prompt_confirmation
