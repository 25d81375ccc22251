import dataclasses
import pickle

import pytest

from layercrypt.cryptoconfig import (
    CryptoConfig,
    DecryptConfig,
    EncryptConfig,
    InvalidArgumentError,
    JweRecipients,
    ParameterSet,
    PrivateKeys,
    X509Certificates,
    combine_crypto_configs,
    decrypt_with_priv_keys,
    decrypt_with_x509s,
    encrypt_with_jwe,
    encrypt_with_pkcs7,
    init_decryption,
    init_encryption,
)


def test_default_crypto_config_is_empty_not_absent():
    cc = CryptoConfig()
    assert cc.is_empty
    assert cc.encryption is None
    assert cc.decryption is None
    assert len(cc.encrypt_config.parameters) == 0
    assert len(cc.decrypt_config.parameters) == 0
    assert cc.encrypt_config.decrypt_config == DecryptConfig()


def test_none_sides_become_empty_configs():
    cc = CryptoConfig(encrypt_config=None, decrypt_config=None)
    assert cc == CryptoConfig()


def test_configured_but_empty_is_distinct_from_not_configured():
    cc = encrypt_with_jwe([])
    assert cc.encrypt_config.parameters["pubkeys"] == ()
    assert cc.encryption is not None
    assert not cc.is_empty


def test_configs_are_frozen():
    cc = encrypt_with_jwe([b"k"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        cc.encrypt_config = EncryptConfig()
    with pytest.raises(AttributeError):
        cc.encrypt_config.parameters._data = {}
    with pytest.raises(TypeError):
        cc.encrypt_config.parameters["pubkeys"] = (b"x",)


def test_from_schemes_checks_direction():
    with pytest.raises(InvalidArgumentError):
        DecryptConfig.from_schemes(JweRecipients([b"k"]))
    with pytest.raises(InvalidArgumentError):
        EncryptConfig.from_schemes(PrivateKeys([b"k"], [b""]))


def test_from_schemes_merges_parameters_in_order():
    dc = DecryptConfig.from_schemes(
        X509Certificates([b"c1"]),
        X509Certificates([b"c2"]),
        PrivateKeys([b"k"], [b"p"]),
    )
    assert dc.parameters["x509s"] == (b"c1", b"c2")
    assert dc.parameters["privkeys"] == (b"k",)
    assert len(dc.schemes) == 3


def test_with_decrypt_config_returns_new_value():
    ec = encrypt_with_jwe([b"k"]).encrypt_config
    dc = decrypt_with_priv_keys([b"priv"], [b""]).decrypt_config
    attached = ec.with_decrypt_config(dc)
    assert attached is not ec
    assert attached.decrypt_config.parameters["privkeys"] == (b"priv",)
    assert ec.decrypt_config == DecryptConfig()
    assert ec.with_decrypt_config(None) is ec


def test_combine_crypto_configs():
    combined = combine_crypto_configs([
        encrypt_with_jwe([b"pub1"]),
        encrypt_with_jwe([b"pub2"]),
        encrypt_with_pkcs7([b"cert1"]),
        decrypt_with_priv_keys([b"priv1"], [b""]),
        decrypt_with_x509s([b"cert2"]),
    ])
    ep = combined.encrypt_config.parameters
    dp = combined.decrypt_config.parameters
    assert ep["pubkeys"] == (b"pub1", b"pub2")
    assert ep["x509s"] == (b"cert1",)
    assert dp["privkeys"] == (b"priv1",)
    assert dp["x509s"] == (b"cert2",)
    assert combined.encrypt_config.decrypt_config == combined.decrypt_config


def test_combine_keeps_embedded_decrypt_config():
    combined = combine_crypto_configs([
        init_encryption({"pubkeys": [b"pub"]}, {"privkeys": [b"priv"], "privkeys-passwords": [b""]}),
    ])
    assert combined.encrypt_config.parameters["pubkeys"] == (b"pub",)
    assert combined.encrypt_config.decrypt_config.parameters["privkeys"] == (b"priv",)
    assert combined.decryption is None


def test_combine_concatenates_embedded_decrypt_configs():
    with_key = encrypt_with_jwe([b"pub"])
    with_key = CryptoConfig(
        encrypt_config=with_key.encrypt_config.with_decrypt_config(
            DecryptConfig.from_schemes(PrivateKeys([b"priv1"], [b""]))
        ),
    )
    combined = combine_crypto_configs([with_key, decrypt_with_priv_keys([b"priv2"], [b"pw"])])
    embedded = combined.encrypt_config.decrypt_config.parameters
    assert embedded["privkeys"] == (b"priv1", b"priv2")
    assert embedded["privkeys-passwords"] == (b"", b"pw")
    assert combined.decrypt_config.parameters["privkeys"] == (b"priv2",)


def test_combine_nothing_is_empty():
    assert combine_crypto_configs([]).is_empty


def test_combine_rejects_other_values():
    with pytest.raises(InvalidArgumentError):
        combine_crypto_configs([{"pubkeys": [b"k"]}])


def test_init_encryption_with_decrypt_parameters():
    cc = init_encryption({"pubkeys": [b"pub"]}, {"privkeys": [b"priv"], "privkeys-passwords": [b""]})
    assert cc.encrypt_config.parameters["pubkeys"] == (b"pub",)
    assert cc.encrypt_config.decrypt_config.parameters["privkeys"] == (b"priv",)
    assert cc.decryption is None


def test_init_encryption_without_decrypt_parameters():
    cc = init_encryption({"experimental-scheme": [b"a", b"b"]})
    assert cc.encrypt_config.parameters["experimental-scheme"] == (b"a", b"b")
    assert cc.encrypt_config.decrypt_config == DecryptConfig()


def test_init_decryption():
    cc = init_decryption({"x509s": [b"cert"]})
    assert cc.decrypt_config.parameters == ParameterSet({"x509s": [b"cert"]})
    assert cc.encryption is None


def test_repr_hides_blob_contents():
    cc = decrypt_with_priv_keys([b"SECRET-KEY"], [b"SECRET-PASSWORD"])
    text = repr(cc)
    assert "SECRET" not in text
    assert "privkeys[1]" in text


def test_crypto_config_is_hashable_and_picklable():
    cc = decrypt_with_x509s([b"cert"])
    assert hash(cc) == hash(decrypt_with_x509s([b"cert"]))
    assert pickle.loads(pickle.dumps(cc)) == cc
