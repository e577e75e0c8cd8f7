"""Restaurant deals server: active deals and peak deal window queries."""
