# Life insurance death claim intake
