from pr_reviewer.main import main

main()
