import copy
import unittest

from pydantic import ValidationError

from common.utils.pydantic import BaseModel, HexBytesField


class TestPydantic(unittest.TestCase):
    class _HexBytesModel(BaseModel):
        value: HexBytesField

    def test_hex_bytes_field(self):
        null_model = self._HexBytesModel.model_validate({"value": None})
        self.assertEqual(null_model.value, bytes())

        zero_model = self._HexBytesModel.model_validate({"value": "0x"})
        self.assertEqual(zero_model.value, bytes())

        no_prefix_model = self._HexBytesModel.model_validate({"value": "abcd"})
        self.assertEqual(no_prefix_model.value, bytes.fromhex("abcd"))

        full_model = self._HexBytesModel.model_validate({"value": "0xABCD"})
        self.assertEqual(full_model.value, bytes.fromhex("abcd"))

        bytes_model = self._HexBytesModel(value=b"\x01\x02")
        self.assertEqual(bytes_model.to_dict(), {"value": "0x0102"})

        with self.assertRaises(ValueError):
            self._HexBytesModel.model_validate({"value": "0xhello"})

    def test_json(self):
        model = self._HexBytesModel(value=b"\xff")
        json_data = model.to_json()
        self.assertEqual(json_data, '{"value":"0xff"}')
        self.assertEqual(self._HexBytesModel.from_json(json_data), model)

    def test_frozen_and_strict(self):
        class _CntModel(BaseModel):
            cnt: int

        model = _CntModel(cnt=1)
        with self.assertRaises(ValidationError):
            model.cnt = 2  # noqa
        with self.assertRaises(ValidationError):
            _CntModel(cnt="1")  # noqa
        with self.assertRaises(ValidationError):
            _CntModel(cnt=1, other=2)  # noqa

    def test_to_string(self):
        class _CntModel(BaseModel):
            cnt: int

        model = _CntModel(cnt=5)
        self.assertEqual(str(model), "_CntModel(cnt=5)")
        self.assertEqual(model, _CntModel(cnt=5))
        self.assertIs(copy.deepcopy(model), model)


if __name__ == "__main__":
    unittest.main()
