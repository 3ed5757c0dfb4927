# Rev 0.1.0
