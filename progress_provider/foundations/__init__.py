"""Foundation layer: types shared by every other layer."""
