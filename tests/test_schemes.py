import pytest

from layercrypt.cryptoconfig import (
    CustomScheme,
    Direction,
    GpgPrivateKeys,
    GpgRecipients,
    InvalidArgumentError,
    JweRecipients,
    Pkcs11Modules,
    Pkcs11Recipients,
    Pkcs7Recipients,
    PrivateKeys,
    Scheme,
    X509Certificates,
    custom_scheme,
    decrypt_with_scheme,
    encrypt_with_scheme,
)


@pytest.mark.parametrize("scheme,expected", [
    (JweRecipients([b"k"]), {"pubkeys": (b"k",)}),
    (Pkcs7Recipients([b"c"]), {"x509s": (b"c",)}),
    (GpgRecipients([b"r"], b"ring"), {"gpg-recipients": (b"r",), "gpg-pubkeyringfile": (b"ring",)}),
    (Pkcs11Recipients([b"m"], [b"p"]), {"modules": (b"m",), "pins": (b"p",)}),
    (PrivateKeys([b"k"], [b""]), {"privkeys": (b"k",), "privkeys-passwords": (b"",)}),
    (X509Certificates([b"c"]), {"x509s": (b"c",)}),
    (GpgPrivateKeys([b"k"], [b"p"]), {"gpg-privatekeys": (b"k",), "gpg-privatekeys-passwords": (b"p",)}),
    (Pkcs11Modules([b"m"], [b"p"]), {"modules": (b"m",), "pins": (b"p",)}),
])
def test_scheme_parameter_keys(scheme, expected):
    assert dict(scheme.parameters()) == expected


def test_scheme_directions():
    assert JweRecipients.direction is Direction.ENCRYPT
    assert Pkcs11Recipients.direction is Direction.ENCRYPT
    assert PrivateKeys.direction is Direction.DECRYPT
    assert Pkcs11Modules.direction is Direction.DECRYPT


def test_gpg_recipients_without_keyring():
    scheme = GpgRecipients([b"r"], None)
    assert scheme.parameters()["gpg-pubkeyringfile"] == (b"",)


def test_gpg_recipients_rejects_text_keyring():
    with pytest.raises(InvalidArgumentError):
        GpgRecipients([b"r"], "ring")


def test_schemes_normalise_fields():
    scheme = PrivateKeys([bytearray(b"k")], [b""])
    assert scheme.privkeys == (b"k",)
    assert scheme == PrivateKeys((b"k",), (b"",))


def test_scheme_repr_hides_contents():
    assert "hunter2" not in repr(PrivateKeys([b"k"], [b"hunter2"]))


def test_custom_scheme_escape_hatch():
    scheme = custom_scheme("keyprovider", Direction.ENCRYPT, {"keyprovider": [b"attrs"]})
    cc = encrypt_with_scheme(scheme)
    assert cc.encrypt_config.parameters["keyprovider"] == (b"attrs",)
    assert cc.encrypt_config.schemes == (scheme,)


def test_custom_decrypt_scheme():
    cc = decrypt_with_scheme(CustomScheme("keyprovider", Direction.DECRYPT, {"keyprovider": [b"x"]}))
    assert cc.decrypt_config.parameters["keyprovider"] == (b"x",)


@pytest.mark.parametrize("kind,direction", [
    ("", Direction.ENCRYPT),
    ("custom", "encrypt"),
])
def test_custom_scheme_validation(kind, direction):
    with pytest.raises(InvalidArgumentError):
        CustomScheme(kind, direction, {})


def test_scheme_base_is_abstract():
    with pytest.raises(TypeError):
        Scheme()


def test_scheme_subclass_must_render_parameters():
    class Incomplete(Scheme):
        kind = "incomplete"
        direction = Direction.ENCRYPT

    with pytest.raises(TypeError):
        Incomplete()
