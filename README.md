# blcrypt

Cryptographic building blocks for reading and writing BitLocker-encrypted volumes.

blcrypt handles the cipher side of BitLocker:

- **Sector encryption and decryption.** It supports AES-CBC, 128 or 256 bit, with
  or without the Elephant diffuser. It also supports AES-XTS, 128 or 256 bit.
  The mode is chosen from the volume's cipher code.
- **Key unwrapping.** BitLocker protects the VMK and FVEK with its own AES-CCM
  variant. blcrypt unwraps keys protected that way and checks the
  authentication tag.
- **CRC32**, as used by BitLocker's metadata validation records.

## Installation

```
pip install blcrypt
```

The only runtime dependency is `cryptography`.

## Decrypting sectors

```python
from blcrypt.ciphers import Cipher
from blcrypt.sector import SectorCipher

fvek = bytes(64)  # key material taken from the FVEK datum

cipher = SectorCipher(512, Cipher.AES_XTS_128)
cipher.set_fvek(Cipher.AES_XTS_128, fvek)

encrypted = bytes(512)  # one sector read from the volume
plain = cipher.decrypt_sector(encrypted, sector_address=0x10000)
assert cipher.encrypt_sector(plain, sector_address=0x10000) == encrypted
```

`SectorCipher(sector_size, disk_cipher)` picks the sector transform:

- Diffuser ciphers use AES-CBC with diffusers A and B and a per-sector key.
- XTS ciphers use AES-XTS.
- Every other code uses plain AES-CBC.

`set_fvek(algorithm, fvek)` takes the data key, and the tweak key where the
algorithm has one, from their fixed offsets in the FVEK:

| Algorithm | Tweak key offset |
| --- | --- |
| Diffuser variants | `0x20` |
| `AES_XTS_128` | `0x10` |
| `AES_XTS_256` | `0x20` |

Pass `sector_address` as the byte offset of the sector on the volume. The CBC
modes use it to derive the IV. XTS divides it by the sector size to get the
tweak.

## Unwrapping a key

```python
from blcrypt.ccm import decrypt_key
from blcrypt.errors import MacMismatchError

key = bytes(32)    # the AES key protecting the datum
nonce = bytes(12)  # from the AES-CCM datum
mac = bytes(16)    # from the AES-CCM datum
data = bytes(44)   # the encrypted payload

try:
    clear = decrypt_key(data, mac, nonce, key)
except MacMismatchError:
    print("wrong key or corrupted datum")
```

`decrypt_key` requires a 12-byte nonce and a 16-byte MAC. It returns the
decrypted bytes only if the recomputed tag matches.

## Lower-level pieces

- **`blcrypt.ciphers.Cipher`** is an `IntEnum` of BitLocker cipher codes. It
  has three methods:
  - `uses_diffuser()`
  - `is_xts()`
  - `key_bits()`, which raises `AlgorithmUnsupportedError` for codes that are
    not disk ciphers.
- **`blcrypt.diffuser`** provides `diffuser_a_encrypt`, `diffuser_a_decrypt`,
  `diffuser_b_encrypt` and `diffuser_b_decrypt`. Each takes a sector whose
  length is a multiple of 4 and returns new bytes.
- **`blcrypt.xts`** provides:
  - `aes_crypt_xts(crypt_key, tweak_key, mode, iv, data)`, with ciphertext
    stealing for a partial final block.
  - `aes_crypt_xex(...)`, for data that is a whole number of blocks.
  - `gf128_mul_x(block)`.
  - `Mode.ENCRYPT` and `Mode.DECRYPT`, which set the direction.
- **`blcrypt.ccm`** provides:
  - `ccm_crypt(key, nonce, data, mac)`, which returns the transformed data and
    the unmasked tag.
  - `compute_tag(key, nonce, data)`.
- **`blcrypt.crc32.crc32(data)`** returns an unsigned 32-bit CRC.

## Errors

Every error is a subclass of `blcrypt.errors.DislockerError`:

- **`InvalidArgumentError`**, also a `ValueError`, is raised in these cases:
  - bad lengths, keys or modes;
  - a sector of the wrong size;
  - encrypting or decrypting before `set_fvek`.
- **`AlgorithmUnsupportedError`** is raised for an unknown algorithm code.
- **`MacMismatchError`** is raised when a key fails to unwrap.

## What blcrypt does not do

blcrypt works only on buffers you give it. It does not:

- open or parse volumes;
- read BitLocker metadata or datums;
- derive keys from recovery passwords, user passwords or BEK files;
- mount anything.

You supply the sector size, the cipher code and the key material from metadata
you have already read.