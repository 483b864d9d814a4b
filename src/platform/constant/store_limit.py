# Integer columns are 32-bit on PostgreSQL; larger values never reach the driver
STORE_INT_MIN = -(2**31)
STORE_INT_MAX = 2**31 - 1
