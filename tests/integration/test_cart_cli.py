"""
Integration tests for the okit-cart CLI against a real storage directory.
"""

import json
from pathlib import Path

import pytest

from okit_boost.adapters.memory_backend import InMemoryTables
from okit_boost.app_shell.cli import main
from okit_boost.context import ServiceContext


@pytest.fixture
def run(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    config_path = tmp_path / "absent.yaml"

    def _run(*args: str) -> tuple[int, str]:
        code = main(["--config", str(config_path), "--storage-dir", str(tmp_path), *args])
        return code, capsys.readouterr().out

    return _run


def test_show_empty(run):
    code, out = run("show")

    assert code == 0
    assert out.strip() == "Panier vide."


def test_add_update_remove_flow(run, tmp_path: Path):
    code, out = run(
        "add", "tt-followers", "--quantity", "2", "--price-usd", "5", "--price-cdf", "12500",
        "--name", "Followers", "--platform", "tiktok",
    )
    assert code == 0
    assert "Followers [tiktok] x2" in out
    assert "Total: 10.0 USD / 25000.0 CDF (1 articles)" in out

    saved = json.loads((tmp_path / "okit-boost-cart.json").read_text(encoding="utf-8"))
    assert saved["state"]["items"][0]["platform_id"] == "tiktok"

    _, out = run("update", "tt-followers", "3")
    assert "Total: 15.0 USD" in out

    _, out = run("show")
    assert "x3" in out

    _, out = run("remove", "tt-followers")
    assert out.strip() == "Panier vide."


def test_clear(run):
    run("add", "a", "--quantity", "1", "--price-usd", "1", "--price-cdf", "2500")
    run("add", "b", "--quantity", "1", "--price-usd", "2", "--price-cdf", "5000")

    _, out = run("clear")

    assert out.strip() == "Panier vide."


def test_corrupt_cart_file_starts_empty(run, tmp_path: Path):
    (tmp_path / "okit-boost-cart.json").write_text("{not json", encoding="utf-8")

    code, out = run("show")

    assert code == 0
    assert out.strip() == "Panier vide."


def test_invalid_config_exits_1(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("remote:\n  backend: sqlite\n", encoding="utf-8")

    assert main(["--config", str(bad), "--storage-dir", str(tmp_path), "show"]) == 1


# --- Checkout ---

CUSTOMER_ARGS = (
    "--name", "Awa M.", "--email", "awa@example.com", "--phone", "+243900000000",
    "--payment-method", "mpesa",
)


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch, ctx: ServiceContext) -> ServiceContext:
    monkeypatch.setattr(ServiceContext, "create", classmethod(lambda cls, config: ctx))
    return ctx


def test_checkout_places_order_and_clears_cart(run, backend, tables: InMemoryTables):
    run(
        "add", "tt-followers", "--quantity", "2", "--price-usd", "0.01", "--price-cdf", "1",
        "--platform", "tiktok", "--link", "https://tiktok.com/@awa",
    )

    code, out = run("checkout", "--token", "user-token", *CUSTOMER_ARGS)

    assert code == 0
    assert out.startswith("Commande créée avec succès: ")
    order = tables.select("orders")[0]
    assert order["user_id"] == "u-1"
    assert order["total_usd"] == 10
    assert order["payment_method"] == "mpesa"
    item = tables.select("order_items", filters={"order_id": order["id"]})[0]
    assert item["target_link"] == "https://tiktok.com/@awa"
    assert run("show")[1].strip() == "Panier vide."


def test_checkout_token_from_env(run, backend, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OKIT_ACCESS_TOKEN", "user-token")
    run("add", "tt-likes", "--quantity", "1", "--price-usd", "2", "--price-cdf", "5000")

    code, _ = run("checkout", *CUSTOMER_ARGS)

    assert code == 0


def test_checkout_unauthenticated_keeps_cart(run, backend, tables: InMemoryTables):
    run("add", "tt-likes", "--quantity", "1", "--price-usd", "2", "--price-cdf", "5000")

    code, out = run("checkout", "--token", "bogus", *CUSTOMER_ARGS)

    assert code == 1
    assert out.strip() == "Non authentifié"
    assert tables.count("orders") == 0
    assert "tt-likes" in run("show")[1]


def test_checkout_invalid_service_keeps_cart(run, backend):
    run("add", "ghost", "--quantity", "1", "--price-usd", "2", "--price-cdf", "5000")

    code, out = run("checkout", "--token", "user-token", *CUSTOMER_ARGS)

    assert code == 1
    assert out.strip() == "Un ou plusieurs services sont invalides"
    assert "ghost" in run("show")[1]


def test_checkout_empty_cart(run, backend):
    code, out = run("checkout", "--token", "user-token", *CUSTOMER_ARGS)

    assert code == 1
    assert out.strip() == "Panier vide."


def test_checkout_without_backend_url(run, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("OKIT_SUPABASE_URL", raising=False)
    monkeypatch.delenv("OKIT_BACKEND", raising=False)
    run("add", "tt-likes", "--quantity", "1", "--price-usd", "2", "--price-cdf", "5000")

    code, _ = run("checkout", "--token", "user-token", *CUSTOMER_ARGS)

    assert code == 1
    assert "tt-likes" in run("show")[1]
